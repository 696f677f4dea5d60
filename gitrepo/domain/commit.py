"""
Commit domain object for gitrepo.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Commit:
    """A commit, identified by its full 40-character hash."""

    hash: str
    repository: Any = field(repr=False, compare=False)

    @property
    def short_hash(self) -> str:
        return self.hash[:7]

    def tag(self, name: str, message: Optional[str] = None):
        """Tag this commit. Returns the new Tag, or None if it did not appear."""
        return self.repository.add_tag(name, message, self)

    def to_dict(self) -> Dict[str, Any]:
        return {'hash': self.hash}

    def __str__(self) -> str:
        return self.hash
