"""Exception hierarchy for vault operations.

Every failure the core reports to its callers is a ``VaultError`` subclass, so
collaborators can tell "does not exist" apart from "could not be read" and
from "not allowed".
"""

from __future__ import annotations


class VaultError(Exception):
    """Base exception for all vault errors.

    Attributes:
        message: Human-readable error message.
        path: Vault-relative (or absolute) path the error concerns, if any.
    """

    def __init__(self, message: str, path: str | None = None) -> None:
        self.message = message
        self.path = path
        super().__init__(message)

    def to_dict(self) -> dict[str, str | None]:
        return {
            "error": type(self).__name__,
            "message": self.message,
            "path": self.path,
        }


class NotFoundError(VaultError):
    """The note, folder or vault root does not exist."""


class AlreadyExistsError(VaultError):
    """A create collided with an existing note and overwrite was not requested."""


class VaultIOError(VaultError):
    """A file exists but could not be read or written (permissions, disk, encoding)."""


class InvalidPathError(VaultError):
    """A path escapes the vault root or is otherwise unusable."""
