"""
Cached repository state for gitrepo.

RepositoryState owns the collections derived from git listings. Each cache
starts unpopulated (None), is filled from a single listing on first access,
and is replaced wholesale on the next access after being cleared. The
commit table is the exception: commits are added one at a time and never
evicted.

The caches are plain instance attributes with no locking; one Repository
is meant to have one logical owner at a time.
"""

import logging
from typing import Dict, Optional

from .domain import Branch, Commit, Remote, Tag
from .parsers import parse_branch_list, parse_remote_list, parse_tag_list

logger = logging.getLogger(__name__)


class RepositoryState:
    """
    Lazily populated caches for one Repository.

    Args:
        repository: The owning Repository. Listings are run through its
            ``run`` method and entities are built with it as back-reference.
    """

    def __init__(self, repository):
        self._repository = repository
        self._branches: Optional[Dict[str, Branch]] = None
        self._active_branch: Optional[Branch] = None
        self._tags: Optional[Dict[str, Tag]] = None
        self._remotes: Optional[Dict[str, Remote]] = None
        self._commits: Dict[str, Commit] = {}

    # Branches

    @property
    def branches_loaded(self) -> bool:
        return self._branches is not None

    def branches(self) -> Dict[str, Branch]:
        if self._branches is None:
            records = parse_branch_list(self._repository.run(['branch']))
            branches = {}
            active = None
            for name, record in records.items():
                branch = Branch(name, self._repository, is_active=record.is_active)
                if record.is_active:
                    active = branch
                branches[name] = branch
            self._branches = branches
            self._active_branch = active
            logger.debug(f"Loaded {len(branches)} branches")
        return self._branches

    def active_branch(self) -> Optional[Branch]:
        self.branches()
        return self._active_branch

    def clear_branches(self) -> None:
        logger.debug("Clearing branch cache")
        self._branches = None
        self._active_branch = None

    # Tags

    @property
    def tags_loaded(self) -> bool:
        return self._tags is not None

    def tags(self) -> Dict[str, Tag]:
        if self._tags is None:
            records = parse_tag_list(self._repository.run(['tag']))
            self._tags = {name: Tag(name, self._repository) for name in records}
            logger.debug(f"Loaded {len(self._tags)} tags")
        return self._tags

    def clear_tags(self) -> None:
        logger.debug("Clearing tag cache")
        self._tags = None

    # Remotes

    @property
    def remotes_loaded(self) -> bool:
        return self._remotes is not None

    def remotes(self) -> Dict[str, Remote]:
        if self._remotes is None:
            records = parse_remote_list(self._repository.run(['remote', '-v']))
            self._remotes = {
                name: Remote(
                    name,
                    self._repository,
                    fetch_url=record.fetch_url,
                    push_url=record.push_url,
                )
                for name, record in records.items()
            }
            logger.debug(f"Loaded {len(self._remotes)} remotes")
        return self._remotes

    def clear_remotes(self) -> None:
        logger.debug("Clearing remote cache")
        self._remotes = None

    # Commits

    def cached_commit(self, commit_hash: str) -> Optional[Commit]:
        return self._commits.get(commit_hash)

    def remember_commit(self, commit_hash: str) -> Commit:
        commit = self._commits.get(commit_hash)
        if commit is None:
            commit = Commit(commit_hash, self._repository)
            self._commits[commit_hash] = commit
        return commit

    @property
    def commit_count(self) -> int:
        return len(self._commits)
