"""
Exception types for gitrepo.

Every error raised by the library derives from GitRepoError, so callers
can catch one type. "Nothing found" outcomes (a missing tag, a clean
working tree, nothing to commit) are never errors; they come back as
None, False or an empty dict.
"""
from typing import Optional, Sequence


class GitRepoError(Exception):
    """Base class for all gitrepo errors."""


class InvalidArgument(GitRepoError, ValueError):
    """
    Raised when an argument or precondition is invalid.

    Examples: the repository path does not exist, the path is not a git
    repository, or a file passed to add/rm is missing.
    """


class FileNotFound(InvalidArgument):
    """Raised when a file passed to add/rm does not exist."""
    def __init__(self, message: str, path: str):
        super().__init__(message)
        self.path = path


class UnsupportedHash(InvalidArgument):
    """Raised for abbreviated commit hashes."""
    def __init__(self, commit_hash: str):
        super().__init__(
            f"Abbreviated commit hashes are not supported: {commit_hash!r}"
        )
        self.hash = commit_hash


class CommandFailed(GitRepoError):
    """
    Raised when git exits with a failure.

    The message is git's stderr, verbatim.
    """
    def __init__(
        self,
        stderr: str,
        command: Optional[Sequence[str]] = None,
        returncode: int = -1
    ):
        super().__init__(stderr)
        self.stderr = stderr
        self.command = list(command) if command else []
        self.returncode = returncode


class ConfigError(GitRepoError):
    """Raised when the configuration file cannot be read."""
    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path
