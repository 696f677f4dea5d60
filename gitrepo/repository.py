"""
Repository facade for gitrepo.

Repository is the public entry point: one method per git operation, each
composing an argument vector, running it through CommandRunner, parsing
the output where there is something to parse, and keeping the cached
branch/tag/remote collections consistent with what it just changed.
"""

import logging
import os
import re
import shlex
from pathlib import Path
from typing import Any, Dict, Optional, Sequence, Union

from .config import load_config
from .domain import Branch, Commit, Remote, Tag
from .exceptions import FileNotFound, InvalidArgument, UnsupportedHash
from .infra.command_runner import CommandRunner
from .parsers import parse_commit_porcelain, parse_status_porcelain, staged_porcelain_lines
from .state import RepositoryState

logger = logging.getLogger(__name__)

GIT_DIR = '.git'
FULL_HASH_LENGTH = 40
ALL_REMOTES = '--all'

_FULL_HASH = re.compile(r'^[0-9a-fA-F]{40}$')

BranchRef = Union[str, Branch]
TagRef = Union[str, Tag]
RemoteRef = Union[str, Remote]
CommitRef = Union[str, Commit]
PathArg = Union[str, os.PathLike]


def _branch_name(branch: BranchRef) -> str:
    return branch.name if isinstance(branch, Branch) else str(branch)


def _tag_name(tag: TagRef) -> str:
    return tag.name if isinstance(tag, Tag) else str(tag)


def _remote_name(remote: RemoteRef) -> str:
    return remote.name if isinstance(remote, Remote) else str(remote)


def _commit_hash(commit: CommitRef) -> str:
    return commit.hash if isinstance(commit, Commit) else str(commit)


class Repository:
    """
    A git repository on disk.

    Example:
        repo = Repository("/path/to/project")
        repo.add(["README.md", "src/app.py"])
        changes = repo.commit("Add app", add_files=True)
        if changes is None:
            print("Nothing to commit")

        for name, branch in repo.get_branches().items():
            print(name, "*" if branch.is_active else "")

    Raises:
        InvalidArgument: If the path does not exist and create_if_missing
            is False, or it is not a git repository and initialize is False
    """

    def __init__(
        self,
        path: PathArg,
        create_if_missing: bool = False,
        initialize: bool = False,
        git_path: Optional[str] = None,
        default_remote: Optional[str] = None,
        config: Optional[Dict[str, Any]] = None
    ):
        """
        Open (and optionally create) a repository.

        Args:
            path: Repository working directory
            create_if_missing: Create the directory if it does not exist
            initialize: Run `git init` if the directory has no .git
            git_path: Path to the git executable (config default: "git")
            default_remote: Remote used when none is named (config default:
                "origin")
            config: Configuration dict (loads default if None)
        """
        self.config = config or load_config()
        git_config = self.config.get('git', {})

        self.primary_branch: str = git_config.get('primary_branch', 'master')
        self.default_remote: str = default_remote or git_config.get('default_remote', 'origin')

        self._path = self._resolve_path(path, create_if_missing)
        self._runner = CommandRunner(self._path, git_path or git_config.get('executable', 'git'))
        self._state = RepositoryState(self)

        if not os.path.exists(os.path.join(self._path, GIT_DIR)):
            if not initialize:
                raise InvalidArgument(f"The specified path is not a git repository: {self._path}")
            logger.info(f"Initializing git repository in {self._path}")
            self.initialize()

    @staticmethod
    def _resolve_path(path: PathArg, create_if_missing: bool) -> str:
        expanded = Path(path).expanduser()
        if not expanded.exists():
            if not create_if_missing:
                raise InvalidArgument(f"The specified path does not exist: {path}")
            logger.info(f"Creating repository directory {expanded}")
            expanded.mkdir(parents=True)
        elif not expanded.is_dir():
            raise InvalidArgument(f"The specified path is not a directory: {path}")
        return str(expanded.resolve())

    @property
    def path(self) -> str:
        """Absolute, resolved path of the working directory."""
        return self._path

    @property
    def git_path(self) -> str:
        return self._runner.executable

    @git_path.setter
    def git_path(self, value: str) -> None:
        self._runner.executable = value

    @property
    def runner(self) -> CommandRunner:
        return self._runner

    @property
    def state(self) -> RepositoryState:
        return self._state

    def __repr__(self) -> str:
        return f"Repository({self._path!r})"

    def run(self, arguments: Sequence[str]) -> str:
        """
        Run git with ``arguments`` in this repository.

        Returns:
            stdout with trailing whitespace removed

        Raises:
            CommandFailed: If git reports a failure
        """
        return self._runner.execute(arguments).stdout

    def initialize(self) -> str:
        """Run `git init`."""
        return self.run(['init'])

    # Working tree

    def _check_file(self, file: PathArg, action: str) -> str:
        # git runs with cwd=self._path, so a relative path that only exists
        # from the caller's cwd is passed on as an absolute path
        file = os.fspath(file)
        if not os.path.isabs(file) and os.path.exists(os.path.join(self._path, file)):
            return file
        if os.path.exists(file):
            return os.path.abspath(file)
        raise FileNotFound(
            f"Cannot {action} {file} because it doesn't exist",
            file,
        )

    def add(self, files: Union[PathArg, Sequence[PathArg]]) -> None:
        """
        Stage a file or a list of files.

        Each path must exist, either as given or relative to the repository
        root.

        Raises:
            FileNotFound: If a path does not exist
        """
        if isinstance(files, (list, tuple)):
            for file in files:
                self.add(file)
            return

        file = self._check_file(files, "add")
        self.run(['add', '--', file])

    def rm(self, files: Union[PathArg, Sequence[PathArg]], force: bool = False) -> None:
        """
        Remove a file or a list of files from the index and working tree.

        Args:
            files: Path or list of paths
            force: Remove even if the file has staged changes

        Raises:
            FileNotFound: If a path does not exist
        """
        if isinstance(files, (list, tuple)):
            for file in files:
                self.rm(file, force=force)
            return

        file = self._check_file(files, "remove")
        arguments = ['rm']
        if force:
            arguments.append('-f')
        self.run(arguments + ['--', file])

    def commit(
        self,
        message: Optional[str] = None,
        add_files: bool = False,
        amend: bool = False,
        author: Optional[str] = None
    ) -> Optional[Dict[str, str]]:
        """
        Make a commit.

        A porcelain dry run is made first to see what would be committed.
        If it reports no staged path, no commit is made. Untracked and
        unstaged paths in the preview are left out.

        Args:
            message: Commit message
            add_files: Include changes to all tracked files (-a)
            amend: Amend the previous commit
            author: Author override, "Name <email>"

        Returns:
            Mapping of committed file path to status code, or None if there
            was nothing to commit
        """
        arguments = ['commit']
        if add_files:
            arguments.append('-a')
        if amend:
            arguments.append('--amend')
        if message:
            arguments.extend(['-m', message])
        if author:
            arguments.append(f'--author={author}')

        preview = staged_porcelain_lines(self.run(arguments + ['--dry-run', '--porcelain']))
        if not preview:
            logger.debug("Nothing to commit")
            return None

        self.run(arguments)
        files = parse_commit_porcelain(preview)
        self._state.clear_branches()
        return files

    def status(self) -> Dict[str, str]:
        """
        Get working tree and index differences.

        Returns:
            Mapping of file path to status code; empty when clean
        """
        output = self.run(['status', '--porcelain'])
        if not output.strip():
            return {}
        return parse_status_porcelain(output)

    def describe(self, options: str = '') -> str:
        """
        Describe HEAD by its nearest reachable tag.

        Args:
            options: Extra `git describe` options, passed through as-is
                (e.g. "--tags" to include lightweight tags)
        """
        return self.run(['describe'] + shlex.split(options))

    def checkout(self, branch: BranchRef, create: bool = False, force: bool = False) -> str:
        """
        Switch to a branch.

        Args:
            branch: Branch name or Branch
            create: Create the branch first (-b)
            force: Discard local changes (-f)
        """
        arguments = ['checkout']
        if force:
            arguments.append('-f')
        # -b takes the branch name as its value, so it goes last
        if create:
            arguments.append('-b')
        arguments.append(_branch_name(branch))

        self._state.clear_branches()
        return self.run(arguments)

    def clean(self, directories: bool = False, force: bool = False) -> str:
        """
        Remove untracked files from the working tree.

        Args:
            directories: Also remove untracked directories (-d)
            force: Pass -f, which git requires unless clean.requireForce is off
        """
        arguments = ['clean']
        if directories:
            arguments.append('-d')
        if force:
            arguments.append('-f')
        return self.run(arguments)

    # Cloning

    def clone_to(self, target_directory: PathArg) -> str:
        """Clone this repository into ``target_directory``."""
        return self.run(['clone', '--local', self._path, os.path.abspath(target_directory)])

    def clone_from(self, source_directory: PathArg) -> str:
        """Clone a local repository at ``source_directory`` into this path."""
        return self.run(['clone', '--local', os.path.abspath(source_directory), self._path])

    def clone_remote(self, source_url: str) -> str:
        """Clone the repository at ``source_url`` into this path."""
        return self.run(['clone', source_url, self._path])

    # Remotes: push / fetch

    def push(
        self,
        remote: Optional[RemoteRef] = None,
        branch: Optional[BranchRef] = None,
        force: bool = False
    ) -> str:
        """
        Push a branch to a remote.

        Args:
            remote: Remote name or Remote (default: self.default_remote)
            branch: Branch name or Branch (default: self.primary_branch)
            force: Force the push (-f)
        """
        remote_name = _remote_name(remote) if remote is not None else self.default_remote
        branch_name = _branch_name(branch) if branch is not None else self.primary_branch

        arguments = ['push']
        if force:
            arguments.append('-f')
        return self.run(arguments + [remote_name, branch_name])

    def fetch(self, remote: RemoteRef = ALL_REMOTES) -> str:
        """
        Fetch from a remote.

        Args:
            remote: Remote name or Remote; ALL_REMOTES fetches every remote
        """
        self._state.clear_branches()
        return self.run(['fetch', _remote_name(remote)])

    # Branches

    def get_branches(self) -> Dict[str, Branch]:
        """Get local branches keyed by name."""
        return self._state.branches()

    def get_active_branch(self) -> Optional[Branch]:
        """Get the checked-out branch, or None when HEAD is detached."""
        return self._state.active_branch()

    def has_branch(self, branch: BranchRef) -> bool:
        return _branch_name(branch) in self.get_branches()

    def get_branch(self, branch: BranchRef) -> Optional[Branch]:
        return self.get_branches().get(_branch_name(branch))

    def create_branch(self, name: str) -> str:
        """Create a branch at HEAD without switching to it."""
        self._state.clear_branches()
        return self.run(['branch', name])

    def delete_branch(self, branch: BranchRef, force: bool = False) -> str:
        """
        Delete a local branch.

        Args:
            branch: Branch name or Branch
            force: Delete even if unmerged (-D instead of -d)
        """
        self._state.clear_branches()
        return self.run(['branch', '-D' if force else '-d', _branch_name(branch)])

    # Tags

    def get_tags(self) -> Dict[str, Tag]:
        return self._state.tags()

    def get_tag(self, tag: TagRef) -> Optional[Tag]:
        """Get a tag by name, or None if there is no such tag."""
        return self.get_tags().get(_tag_name(tag))

    def has_tag(self, tag: TagRef) -> bool:
        return _tag_name(tag) in self.get_tags()

    def add_tag(
        self,
        name: str,
        message: Optional[str] = None,
        commit: Optional[CommitRef] = None
    ) -> Optional[Tag]:
        """
        Create a tag.

        Args:
            name: Tag name
            message: Annotation message; creates an annotated tag when given
            commit: Commit hash or Commit to tag (default: HEAD)

        Returns:
            The new Tag, or None if it does not show up in the tag listing
        """
        arguments = ['tag']
        if message is not None:
            arguments.extend(['-m', message])
        arguments.append(name)
        if commit is not None:
            arguments.append(_commit_hash(commit))

        self.run(arguments)
        self._state.clear_tags()
        return self.get_tag(name)

    def remove_tag(self, tag: TagRef) -> bool:
        """
        Delete a tag.

        Returns:
            True if the tag existed and was removed, False if there was no
            such tag (nothing is run in that case)
        """
        name = _tag_name(tag)
        if not self.has_tag(name):
            return False

        self.run(['tag', '-d', name])
        self._state.clear_tags()
        return True

    # Remotes

    def get_remotes(self) -> Dict[str, Remote]:
        """
        Get remotes keyed by name.

        The listing is cached until add_remote/remove_remote or
        clear_remotes(); remotes changed outside this object are not seen
        until then.
        """
        return self._state.remotes()

    def get_remote(self, remote: Optional[RemoteRef] = None) -> Optional[Remote]:
        """Get a remote by name (default: self.default_remote), or None."""
        name = _remote_name(remote) if remote is not None else self.default_remote
        return self.get_remotes().get(name)

    def has_remote(self, remote: RemoteRef) -> bool:
        return _remote_name(remote) in self.get_remotes()

    def add_remote(self, name: str, url: str) -> Optional[Remote]:
        """Add a remote and return it."""
        self.run(['remote', 'add', name, url])
        self._state.clear_remotes()
        return self.get_remote(name)

    def remove_remote(self, remote: RemoteRef) -> bool:
        """Remove a remote. Returns False if there was no such remote."""
        name = _remote_name(remote)
        if not self.has_remote(name):
            return False

        self.run(['remote', 'remove', name])
        self._state.clear_remotes()
        return True

    def clear_remotes(self) -> None:
        """Forget the cached remote listing."""
        self._state.clear_remotes()

    # Commits

    @staticmethod
    def _validate_hash(commit_hash: str) -> str:
        if len(commit_hash) < FULL_HASH_LENGTH:
            raise UnsupportedHash(commit_hash)
        if not _FULL_HASH.match(commit_hash):
            raise InvalidArgument(f"Not a commit hash: {commit_hash!r}")
        return commit_hash.lower()

    def has_commit(self, commit: CommitRef) -> bool:
        """
        Check whether a full commit hash resolves to a commit here.

        `rev-parse --verify --quiet` exits 1 with no output for unknown
        objects, which CommandRunner reports as an empty successful result.
        """
        commit_hash = self._validate_hash(_commit_hash(commit))
        output = self.run(['rev-parse', '--verify', '--quiet', f'{commit_hash}^{{commit}}'])
        return bool(output.strip())

    def get_commit(self, commit_hash: CommitRef) -> Optional[Commit]:
        """
        Get a commit by its full hash.

        Args:
            commit_hash: 40-character hash (or a Commit)

        Returns:
            The Commit, or None if the hash does not resolve

        Raises:
            UnsupportedHash: For abbreviated hashes; git is not run
        """
        commit_hash = self._validate_hash(_commit_hash(commit_hash))

        cached = self._state.cached_commit(commit_hash)
        if cached is not None:
            return cached

        if not self.has_commit(commit_hash):
            return None
        return self._state.remember_commit(commit_hash)

    def get_head_commit(self) -> Optional[Commit]:
        """Get the commit HEAD points to, or None in an empty repository."""
        output = self.run(['rev-parse', '--verify', '--quiet', 'HEAD'])
        if not output.strip():
            return None
        return self._state.remember_commit(output.strip().lower())
