"""
Tag domain object for gitrepo.
"""

from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass(frozen=True)
class Tag:
    """A tag in the repository, lightweight or annotated."""

    name: str
    repository: Any = field(repr=False, compare=False)

    def delete(self) -> bool:
        return self.repository.remove_tag(self)

    def push(self, remote=None) -> str:
        """Push this tag to ``remote`` (the default remote when omitted)."""
        return self.repository.push(remote, self.name)

    def to_dict(self) -> Dict[str, Any]:
        return {'name': self.name}

    def __str__(self) -> str:
        return self.name
