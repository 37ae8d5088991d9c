import json
import logging
from pathlib import Path
from typing import Any, Callable
from unittest.mock import MagicMock

import requests
from pytest import fixture

from docbase_sync import Client

logging.basicConfig(level=logging.WARNING)

TOKEN = "test-token"
TEAM_ID = "test-team"
BASE_URL = "https://api.docbase.test"

POSTS_URL = f"{BASE_URL}/teams/{TEAM_ID}/posts"

DOCUMENTS_PATH = Path(__file__).parent / "core" / "documents"


@fixture(autouse=True)
def newline(request):
    """
    Print a newline and underline test name.
    """
    print("\n" + "-" * len(request.node.nodeid))


@fixture
def client() -> Client:
    """
    Client pointing at a fake DocBase host; requests are expected to be
    patched by the testcase.
    """
    return Client(TOKEN, TEAM_ID, base_url=BASE_URL)


@fixture
def make_response() -> Callable[..., MagicMock]:
    """
    Get factory for fake `requests.Response` objects.
    """

    def factory(
        status_code: int = 200,
        body: Any = None,
        *,
        text: str | None = None,
    ) -> MagicMock:
        response = MagicMock(spec=requests.Response)
        response.status_code = status_code
        response.ok = status_code < 400
        response.reason = "OK" if status_code < 400 else "Error"
        response.text = text if text is not None else json.dumps(body)
        return response

    return factory


@fixture
def remote_post() -> dict[str, Any]:
    """
    Post as returned by DocBase.
    """
    return {
        "id": 42,
        "title": "T",
        "body": "B",
        "draft": False,
        "archived": False,
        "url": "https://test-team.docbase.io/posts/42",
        "created_at": "2024-05-01T12:00:00+09:00",
        "tags": [{"name": "x"}],
        "scope": "everyone",
    }


@fixture
def document(tmp_path: Path) -> Callable[[str], Path]:
    """
    Get factory writing a document to a temp folder.
    """

    def factory(text: str, name: str = "note.md") -> Path:
        path = tmp_path / name
        path.write_bytes(text.encode("utf-8"))
        return path

    return factory


@fixture
def posts_url() -> str:
    """
    URL of the fake team's posts collection.
    """
    return POSTS_URL
