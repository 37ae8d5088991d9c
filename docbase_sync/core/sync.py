"""
Pull and push operations on a single document.

Both operations read the document, make at most one request to DocBase and
write the document back as the last step. The write goes through a temporary
file so the document is either fully replaced or left untouched.
"""
from __future__ import annotations

import logging
import os
import tempfile
import threading
from contextlib import contextmanager
from logging import Logger
from pathlib import Path
from typing import Generator
from weakref import WeakValueDictionary

from .client import Client
from .exceptions import DocumentError, ParseError
from .model import RemoteNote
from .transcode import assign_note_id, parse_document, render_document

__all__ = [
    "pull",
    "push",
]

_locks: WeakValueDictionary[Path, threading.Lock] = WeakValueDictionary()
_locks_lock = threading.Lock()


def pull(
    path: Path,
    client: Client,
    *,
    logger: Logger | None = None,
    dry_run: bool = False,
) -> str:
    """
    Overwrite document with its DocBase note, returning the new document
    text.

    :raises ParseError: Document has no front matter or note id
    :raises DocumentError: Document couldn't be read or written
    :raises NetworkError: Request failed
    :raises RemoteDecodeError: Unexpected response
    """
    logger = logger or logging.getLogger()

    with _lock_document(path):
        record = parse_document(_read(path))
        if not record.remote_id:
            raise ParseError("missing note id")

        remote_record = client.fetch_note(record.remote_id)
        text = render_document(remote_record, record.remote_id)

        if dry_run:
            logger.info(f"Would write note {record.remote_id} to '{path}'")
        else:
            _write(path, text)

    return text


def push(
    path: Path,
    client: Client,
    *,
    logger: Logger | None = None,
    create: bool = False,
    dry_run: bool = False,
) -> RemoteNote | None:
    """
    Send document to DocBase, updating its linked note. If `create` is set and
    the document isn't linked yet, a new note is created and its id written
    into the document's front matter.

    Returns the note as saved by DocBase, or `None` for a dry run.

    :raises ParseError: Document has no front matter or body, or no note id
    and `create` isn't set
    :raises DocumentError: Document couldn't be read or written
    :raises NetworkError: Request failed
    :raises RemoteDecodeError: Unexpected response
    """
    logger = logger or logging.getLogger()

    with _lock_document(path):
        text = _read(path)
        record = parse_document(text, require_id=not create)

        if dry_run:
            action = (
                f"update note {record.remote_id}"
                if record.remote_id
                else "create note"
            )
            logger.info(f"Would {action} from '{path}': {record.to_payload()}")
            return None

        remote_note = client.save_note(record, record.remote_id)

        if record.remote_id is None:
            logger.info(
                f"Created note {remote_note.note_id}, linking to '{path}'"
            )
            _write(path, assign_note_id(text, remote_note.note_id))

    return remote_note


@contextmanager
def _lock_document(path: Path) -> Generator[None, None, None]:
    """
    Serialize operations on the same document.
    """
    key = path.resolve()

    # entry is dropped once no operation holds a reference to the lock
    with _locks_lock:
        lock = _locks.get(key)
        if lock is None:
            lock = threading.Lock()
            _locks[key] = lock

    with lock:
        yield


def _read(path: Path) -> str:
    try:
        with path.open(encoding="utf-8", newline="") as fh:
            return fh.read()
    except UnicodeDecodeError as e:
        raise ParseError(f"document is not valid UTF-8: {e}") from e
    except OSError as e:
        raise DocumentError(f"failed to read document: {e}") from e


def _write(path: Path, text: str):
    """
    Replace document contents atomically.
    """
    try:
        fd, tmp_name = tempfile.mkstemp(
            dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
        )
    except OSError as e:
        raise DocumentError(f"failed to write document: {e}") from e

    tmp_path = Path(tmp_name)

    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as fh:
            fh.write(text)

        if path.exists():
            os.chmod(tmp_path, path.stat().st_mode & 0o777)

        os.replace(tmp_path, path)
    except OSError as e:
        tmp_path.unlink(missing_ok=True)
        raise DocumentError(f"failed to write document: {e}") from e
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise
