"""
gitrepo - An object-oriented interface to git repositories.

gitrepo runs the git executable for you and turns its output into Python
objects, so build scripts and tools can inspect and change a repository
without assembling command lines or parsing text themselves.

Quick Start:
    import gitrepo

    # Open an existing repository
    repo = gitrepo.Repository("~/projects/myapp")

    # Or create and initialise one
    repo = gitrepo.Repository("/tmp/scratch", create_if_missing=True, initialize=True)

    # Stage and commit
    repo.add(["README.md", "setup.cfg"])
    changes = repo.commit("Initial import")   # {"README.md": "A", ...} or None

    # Branches
    repo.create_branch("feature")
    repo.checkout("feature")
    print(repo.get_active_branch())            # feature

    # Tags
    repo.add_tag("v1.0", message="First release")
    repo.remove_tag("v1.0")                    # True

    # Remotes
    origin = repo.get_remote()                 # default remote
    if origin:
        print(origin.fetch_url, origin.push_url)

Domain Objects:
    Branch, Tag, Remote, Commit - identifiers with a back-reference to the
    Repository they came from

Errors:
    GitRepoError - base class
    CommandFailed - git reported a failure (carries stderr)
    InvalidArgument - bad path, missing file, abbreviated hash
"""

__version__ = "0.3.0"

from .repository import Repository, ALL_REMOTES

from .domain import (
    Branch,
    Tag,
    Remote,
    Commit,
)

from .infra import CommandRunner, CommandResult

from .exceptions import (
    GitRepoError,
    InvalidArgument,
    FileNotFound,
    UnsupportedHash,
    CommandFailed,
    ConfigError,
)

from .config import load_config, save_config, configure_logging

__all__ = [
    # Version
    "__version__",
    # Facade
    "Repository",
    "ALL_REMOTES",
    # Domain objects
    "Branch",
    "Tag",
    "Remote",
    "Commit",
    # Infrastructure
    "CommandRunner",
    "CommandResult",
    # Errors
    "GitRepoError",
    "InvalidArgument",
    "FileNotFound",
    "UnsupportedHash",
    "CommandFailed",
    "ConfigError",
    # Configuration
    "load_config",
    "save_config",
    "configure_logging",
]
