"""
Domain layer for gitrepo.

Lightweight value objects for the things a repository contains:
- Branch: a local branch, flagged when it is the active one
- Tag: a tag name
- Remote: a named remote with its fetch and push URLs
- Commit: a full 40-character commit hash

Each holds its identifier plus a back-reference to the Repository it came
from, and delegates every operation back to that Repository.
"""

from .branch import Branch
from .tag import Tag
from .remote import Remote
from .commit import Commit

__all__ = [
    'Branch',
    'Tag',
    'Remote',
    'Commit',
]
