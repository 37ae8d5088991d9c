__all__ = [
    "DocBaseSyncError",
    "ConfigError",
    "ParseError",
    "DocumentError",
    "NetworkError",
    "RemoteDecodeError",
]


class DocBaseSyncError(Exception):
    """
    Base class of all errors raised by pull/push operations. Each of these is
    reported to the user as a short notification rather than a traceback.
    """


class ConfigError(DocBaseSyncError):
    """
    Raised when the access token or team id is missing.
    """


class ParseError(DocBaseSyncError):
    """
    Raised when a document's front matter, note id or body can't be
    extracted.

    Examples:

    - Document doesn't start with a `---` block
    - Front matter has no `docbase_note_id`
    - Document isn't valid UTF-8
    - No `# Title` heading follows the front matter
    """


class DocumentError(DocBaseSyncError):
    """
    Raised when a document can't be read or written, e.g. a missing
    folder or a full disk.
    """


class NetworkError(DocBaseSyncError):
    """
    Raised when DocBase returns a non-success status or the request fails
    in transport, including timeouts.
    """

    status_code: int | None

    def __init__(self, message: str, *, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class RemoteDecodeError(DocBaseSyncError):
    """
    Raised when a DocBase response body isn't the expected JSON.
    """
