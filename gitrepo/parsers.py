"""
Parsers for git's textual output.

Every function here is pure: it takes the stdout of one git command and
returns structured records. Lines that do not fit the expected shape are
skipped rather than raised, so a single odd line never hides the rest of
a listing.
"""

import logging
import re
from dataclasses import dataclass
from typing import Dict, Optional

logger = logging.getLogger(__name__)

ACTIVE_BRANCH_MARKER = '* '

# `git branch` prints these instead of a name when HEAD is not on a branch
_DETACHED_HEAD = re.compile(r'^\((HEAD detached|no branch|not currently on any branch)')

# `git remote -v`: "<name>\t<url> (fetch)", optionally followed by a
# partial-clone filter such as "[blob:none]"
_REMOTE_LINE = re.compile(r'^(\S+)\s+(.*?)\s+\((fetch|push)\)(?:\s.*)?$')

# index column values of `--porcelain` lines that are not part of a commit
_UNSTAGED_INDEX = (' ', '?', '!')


@dataclass(frozen=True)
class BranchRecord:
    """One line of `git branch`."""
    name: str
    is_active: bool = False


@dataclass(frozen=True)
class TagRecord:
    """One line of `git tag`."""
    name: str


@dataclass(frozen=True)
class RemoteRecord:
    """A remote assembled from its fetch and push lines in `git remote -v`."""
    name: str
    fetch_url: Optional[str] = None
    push_url: Optional[str] = None


def _lines(output: Optional[str]):
    return output.split('\n') if output else []


def parse_branch_list(output: str) -> Dict[str, BranchRecord]:
    """
    Parse `git branch` output.

    The active branch is prefixed with "* "; exactly those two characters
    are removed. A detached HEAD line is not a branch and is skipped.

    Args:
        output: stdout of `git branch`

    Returns:
        Mapping of branch name to BranchRecord, in listing order
    """
    branches: Dict[str, BranchRecord] = {}

    for line in _lines(output):
        if not line.strip():
            continue

        is_active = line.startswith(ACTIVE_BRANCH_MARKER)
        name = line[len(ACTIVE_BRANCH_MARKER):].strip() if is_active else line.strip()

        if _DETACHED_HEAD.match(name):
            logger.debug(f"Skipping detached HEAD entry: {name}")
            continue

        branches[name] = BranchRecord(name=name, is_active=is_active)

    return branches


def parse_tag_list(output: str) -> Dict[str, TagRecord]:
    """Parse `git tag` output, one tag name per line."""
    tags: Dict[str, TagRecord] = {}
    for line in _lines(output):
        name = line.strip()
        if name:
            tags[name] = TagRecord(name=name)
    return tags


def parse_remote_list(output: str) -> Dict[str, RemoteRecord]:
    """
    Parse `git remote -v` output.

    Each remote appears on a fetch line and a push line. The two URLs are
    recorded independently, so a remote whose push URL differs from its
    fetch URL keeps both.

    Args:
        output: stdout of `git remote -v`

    Returns:
        Mapping of remote name to RemoteRecord
    """
    urls: Dict[str, Dict[str, Optional[str]]] = {}

    for line in _lines(output):
        match = _REMOTE_LINE.match(line.strip())
        if not match:
            if line.strip():
                logger.debug(f"Ignoring unrecognised remote line: {line!r}")
            continue

        name, url, direction = match.groups()
        entry = urls.setdefault(name, {'fetch': None, 'push': None})
        entry[direction] = url

    return {
        name: RemoteRecord(name=name, fetch_url=entry['fetch'], push_url=entry['push'])
        for name, entry in urls.items()
    }


def parse_commit_porcelain(output: str) -> Dict[str, str]:
    """
    Parse `git commit --dry-run --porcelain` output.

    The status occupies a fixed three-character column (two status letters
    and a separator); everything after it is the path. The column is cut by
    position, not by splitting on whitespace, because a status like " M"
    starts with a space.

    Returns:
        Mapping of file path to status code (e.g. {"src/app.py": "M"})
    """
    files: Dict[str, str] = {}
    for line in _lines(output):
        if not line.strip():
            continue
        status = line[:3].strip()
        path = line[3:].strip()
        if path:
            files[path] = status
    return files


def staged_porcelain_lines(output: str) -> str:
    """
    Keep only the `--porcelain` lines whose index column records a change.

    A commit dry run also lists untracked (??), ignored (!!) and unstaged
    ( M) paths; none of them would be committed.
    """
    return '\n'.join(
        line for line in _lines(output)
        if line.strip() and line[0] not in _UNSTAGED_INDEX
    )


def parse_status_porcelain(output: str) -> Dict[str, str]:
    """
    Parse `git status --porcelain` output.

    Each line is trimmed and split on its first space into status and path.
    Not interchangeable with parse_commit_porcelain.

    Returns:
        Mapping of file path to status code, empty when the tree is clean
    """
    files: Dict[str, str] = {}
    for line in _lines(output):
        parts = line.strip().split(' ', 1)
        if len(parts) < 2:
            continue
        status = parts[0].strip()
        path = parts[1].strip()
        if path:
            files[path] = status
    return files
