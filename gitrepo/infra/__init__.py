"""
Infrastructure layer for gitrepo.

Contains the abstraction over the external git process:
- CommandRunner: runs git in a fixed working directory
- CommandResult: captured output of one invocation

Kept separate from the repository facade so it can be mocked for testing.
"""

from .command_runner import CommandRunner, CommandResult

__all__ = [
    'CommandRunner',
    'CommandResult',
]
