"""
Test DocBase client against patched requests.
"""

from typing import Any, Callable
from unittest.mock import MagicMock, patch

import requests
from pytest import mark, raises

from docbase_sync import (
    Client,
    NetworkError,
    NoteRecord,
    RemoteDecodeError,
    fetch_note,
    save_note,
)
from docbase_sync.core.client import API_URL, REQUEST_TIMEOUT

MakeResponse = Callable[..., MagicMock]


def test_fetch_note(
    client: Client,
    make_response: MakeResponse,
    remote_post: dict[str, Any],
    posts_url: str,
):
    with patch("requests.get", return_value=make_response(200, remote_post)) as get:
        record = client.fetch_note("42")

    get.assert_called_once_with(
        f"{posts_url}/42",
        headers={"X-DocBaseToken": "test-token"},
        timeout=REQUEST_TIMEOUT,
    )

    assert record == NoteRecord(
        title="T", body="B", draft=False, tags=["x"], remote_id="42"
    )


def test_fetch_note_string_tags(
    client: Client, make_response: MakeResponse, remote_post: dict[str, Any]
):
    """
    Tags given as plain names are accepted as well as `{name}` objects.
    """
    remote_post["tags"] = ["a", "b"]
    remote_post["body"] = None

    with patch("requests.get", return_value=make_response(200, remote_post)):
        record = client.fetch_note("42")

    assert record.tags == ["a", "b"]
    assert record.body == ""


@mark.parametrize("status_code", [401, 404, 500])
def test_fetch_note_status(
    client: Client, make_response: MakeResponse, status_code: int
):
    response = make_response(status_code, {"error": "not_found"})

    with patch("requests.get", return_value=response):
        with raises(NetworkError) as e:
            client.fetch_note("42")

    assert e.value.status_code == status_code


def test_fetch_note_timeout(client: Client):
    with patch("requests.get", side_effect=requests.Timeout("slow")):
        with raises(NetworkError, match="timed out"):
            client.fetch_note("42")


def test_fetch_note_connection_error(client: Client):
    with patch("requests.get", side_effect=requests.ConnectionError("refused")):
        with raises(NetworkError, match="refused") as e:
            client.fetch_note("42")

    assert e.value.status_code is None


@mark.parametrize(
    "text",
    [
        "<html>maintenance</html>",
        "[]",
        '{"id": 42}',
        '{"id": 42, "title": "T", "body": "B", "tags": 5}',
    ],
)
def test_fetch_note_decode_error(
    client: Client, make_response: MakeResponse, text: str
):
    with patch("requests.get", return_value=make_response(200, text=text)):
        with raises(RemoteDecodeError):
            client.fetch_note("42")


def test_save_note_update(
    client: Client,
    make_response: MakeResponse,
    remote_post: dict[str, Any],
    posts_url: str,
):
    record = NoteRecord(title="T", body="Hello", draft=True, tags=["x"])

    with patch(
        "requests.patch", return_value=make_response(200, remote_post)
    ) as patch_, patch("requests.post") as post:
        remote_note = client.save_note(record, "42")

    post.assert_not_called()
    patch_.assert_called_once()

    args, kwargs = patch_.call_args
    assert args == (f"{posts_url}/42",)
    assert kwargs["headers"] == {
        "X-DocBaseToken": "test-token",
        "Content-Type": "application/json",
    }
    assert kwargs["timeout"] == REQUEST_TIMEOUT

    # single tag is still sent as a list
    assert kwargs["data"] == (
        '{"title": "T", "body": "Hello", "draft": true, "tags": ["x"]}'
    )

    assert remote_note.note_id == "42"
    assert remote_note.url == "https://test-team.docbase.io/posts/42"


def test_save_note_create(
    client: Client,
    make_response: MakeResponse,
    remote_post: dict[str, Any],
    posts_url: str,
):
    remote_post["id"] = 100

    with patch(
        "requests.post", return_value=make_response(201, remote_post)
    ) as post, patch("requests.patch") as patch_:
        remote_note = client.save_note(NoteRecord(title="T", body="B"))

    patch_.assert_not_called()
    assert post.call_args.args == (posts_url,)
    assert post.call_args.kwargs["data"] == (
        '{"title": "T", "body": "B", "draft": false, "tags": []}'
    )

    assert remote_note.note_id == "100"


def test_save_note_status(client: Client, make_response: MakeResponse):
    with patch("requests.patch", return_value=make_response(400, {})):
        with raises(NetworkError) as e:
            client.save_note(NoteRecord(title="T"), "42")

    assert e.value.status_code == 400


def test_module_functions(
    make_response: MakeResponse, remote_post: dict[str, Any]
):
    """
    Functional wrappers use the DocBase API URL.
    """
    with patch("requests.get", return_value=make_response(200, remote_post)) as get:
        record = fetch_note("token", "team", "42")

    assert get.call_args.args == (f"{API_URL}/teams/team/posts/42",)
    assert record.remote_id == "42"

    with patch("requests.patch", return_value=make_response(200, remote_post)) as patch_:
        save_note("token", "team", record, "42")

    assert patch_.call_args.args == (f"{API_URL}/teams/team/posts/42",)
    assert patch_.call_args.kwargs["headers"]["X-DocBaseToken"] == "token"
