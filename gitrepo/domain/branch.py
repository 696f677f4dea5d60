"""
Branch domain object for gitrepo.
"""

from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass(frozen=True)
class Branch:
    """
    A local branch.

    Attributes:
        name: Branch name (e.g., "main", "feature/login")
        repository: Repository the branch belongs to
        is_active: True when HEAD points at this branch
    """

    name: str
    repository: Any = field(repr=False, compare=False)
    is_active: bool = False

    def checkout(self, force: bool = False) -> str:
        return self.repository.checkout(self, force=force)

    def delete(self, force: bool = False) -> str:
        return self.repository.delete_branch(self, force=force)

    def push(self, remote=None, force: bool = False) -> str:
        return self.repository.push(remote, self, force=force)

    def to_dict(self) -> Dict[str, Any]:
        return {'name': self.name, 'is_active': self.is_active}

    def __str__(self) -> str:
        return self.name
