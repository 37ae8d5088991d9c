"""
Interface to the DocBase posts API.
"""
from __future__ import annotations

import json
import logging
from logging import Logger
from typing import Any

import requests
from pydantic import ValidationError

from .exceptions import NetworkError, RemoteDecodeError
from .model import NoteRecord, RemoteNote

__all__ = [
    "Client",
    "fetch_note",
    "save_note",
]

API_URL = "https://api.docbase.io"
"""
Base URL of DocBase API.
"""

TOKEN_HEADER = "X-DocBaseToken"
"""
Header carrying the access token.
"""

REQUEST_TIMEOUT = 10.0
"""
Timeout in seconds for each request.
"""


class Client:
    """
    Issues requests to DocBase on behalf of a single team.

    Every request is made with a bounded timeout. Failures are raised as:

    - {obj}`NetworkError` for transport errors, timeouts and non-success
    statuses
    - {obj}`RemoteDecodeError` for response bodies which can't be decoded
    """

    _token: str
    """
    Access token.
    """

    _team_id: str
    """
    Team (domain) the posts belong to.
    """

    _base_url: str
    _timeout: float
    _logger: Logger

    def __init__(
        self,
        token: str,
        team_id: str,
        *,
        base_url: str = API_URL,
        timeout: float = REQUEST_TIMEOUT,
        logger: Logger | None = None,
    ):
        """
        :param token: DocBase access token
        :param team_id: DocBase team id
        :param base_url: API URL, overridable for testing
        :param timeout: Timeout in seconds for each request
        :param logger: Logger to use, or `None` to use default logger
        """
        self._token = token
        self._team_id = team_id
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._logger = logger or logging.getLogger()

    @property
    def team_id(self) -> str:
        return self._team_id

    def fetch_note(self, note_id: str) -> NoteRecord:
        """
        Get note by id.
        """
        response = self._request("GET", self._post_url(note_id))
        return self._decode(response).to_record()

    def save_note(
        self, record: NoteRecord, note_id: str | None = None
    ) -> RemoteNote:
        """
        Update the note with the given id, or create a new note if no id is
        given. The returned note carries the id assigned by DocBase.
        """
        payload = record.to_payload()

        if note_id is None:
            response = self._request("POST", self._posts_url, payload=payload)
        else:
            response = self._request(
                "PATCH", self._post_url(note_id), payload=payload
            )

        return self._decode(response)

    @property
    def _posts_url(self) -> str:
        return f"{self._base_url}/teams/{self._team_id}/posts"

    def _post_url(self, note_id: str) -> str:
        return f"{self._posts_url}/{note_id}"

    def _request(
        self,
        method: str,
        url: str,
        *,
        payload: dict[str, Any] | None = None,
    ) -> requests.Response:
        """
        Issue request and ensure it succeeded.
        """
        headers = {TOKEN_HEADER: self._token}

        if payload is not None:
            headers["Content-Type"] = "application/json"
            self._logger.debug(f"{method} {url} payload: {payload}")
        else:
            self._logger.debug(f"{method} {url}")

        data = None if payload is None else json.dumps(payload)

        try:
            if method == "GET":
                response = requests.get(
                    url, headers=headers, timeout=self._timeout
                )
            elif method == "POST":
                response = requests.post(
                    url, headers=headers, data=data, timeout=self._timeout
                )
            else:
                assert method == "PATCH"
                response = requests.patch(
                    url, headers=headers, data=data, timeout=self._timeout
                )
        except requests.Timeout as e:
            raise NetworkError(
                f"{method} {url} timed out after {self._timeout}s"
            ) from e
        except requests.RequestException as e:
            raise NetworkError(f"{method} {url} failed: {e}") from e

        if not response.ok:
            raise NetworkError(
                f"{method} {url} response: {response.status_code} {response.reason}",
                status_code=response.status_code,
            )

        return response

    def _decode(self, response: requests.Response) -> RemoteNote:
        try:
            return RemoteNote.model_validate(json.loads(response.text))
        except (ValueError, ValidationError) as e:
            raise RemoteDecodeError(
                f"Unexpected response from DocBase: {e}"
            ) from e


def fetch_note(token: str, team_id: str, note_id: str) -> NoteRecord:
    """
    Get note by id using a one-off client.
    """
    return Client(token, team_id).fetch_note(note_id)


def save_note(
    token: str, team_id: str, record: NoteRecord, note_id: str | None = None
) -> RemoteNote:
    """
    Update or create note using a one-off client.
    """
    return Client(token, team_id).save_note(record, note_id)
