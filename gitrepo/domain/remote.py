"""
Remote domain object for gitrepo.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Remote:
    """
    A named remote.

    fetch_url and push_url are reported on separate lines by
    `git remote -v`, so either may be missing and they may differ.
    """

    name: str
    repository: Any = field(repr=False, compare=False)
    fetch_url: Optional[str] = None
    push_url: Optional[str] = None

    def fetch(self) -> str:
        return self.repository.fetch(self)

    def push(self, branch=None, force: bool = False) -> str:
        return self.repository.push(self, branch, force=force)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'fetch_url': self.fetch_url,
            'push_url': self.push_url,
        }

    def __str__(self) -> str:
        return self.name
