"""Error types raised while generating release notes."""

from typing import Optional


class ReleaseNoteError(Exception):
    """Base class for release note generation failures."""


class NotFoundError(ReleaseNoteError):
    """A milestone, merge event or other record could not be found."""


class InvalidStateError(ReleaseNoteError):
    """An operation was invoked on a record in the wrong state."""


class TransportError(ReleaseNoteError):
    """The GitHub API could not be reached or returned an error."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
