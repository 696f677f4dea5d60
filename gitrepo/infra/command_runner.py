"""
Git process runner for gitrepo.

All git invocations go through CommandRunner, making them:
- Free of shell interpretation (arguments are passed as a vector)
- Consistent in how failures are detected and reported
- Easy to mock for testing
"""

import logging
import subprocess
from dataclasses import dataclass
from typing import Sequence, Tuple

from ..exceptions import CommandFailed

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandResult:
    """Captured result of a single git invocation."""
    stdout: str
    stderr: str = ""
    returncode: int = 0
    succeeded: bool = True

    def as_tuple(self) -> Tuple[str, bool]:
        return self.stdout, self.succeeded


class CommandRunner:
    """
    Runs the git executable inside a repository directory.

    A command is treated as failed only when git exits non-zero AND writes
    something to stderr. Some git commands use the exit status to report
    information (``git rev-parse --verify --quiet`` on a missing object,
    ``git commit --dry-run`` with nothing staged), and those are returned
    as successful results with whatever stdout they produced.

    Example:
        runner = CommandRunner("/path/to/repo")
        result = runner.execute(["branch"])
        print(result.stdout)
    """

    def __init__(self, working_dir: str, executable: str = "git"):
        """
        Initialize CommandRunner.

        Args:
            working_dir: Directory every command runs in
            executable: Path to (or name of) the git executable
        """
        self.working_dir = str(working_dir)
        self.executable = executable

    def build_command(self, arguments: Sequence[str]) -> list:
        """Return the full argument vector for ``arguments``."""
        if isinstance(arguments, str):
            raise TypeError("arguments must be a sequence of strings, not a string")
        return [self.executable] + [str(arg) for arg in arguments]

    def execute(self, arguments: Sequence[str], check: bool = True) -> CommandResult:
        """
        Run git with the given arguments.

        Both output streams are read to completion before the exit status
        is inspected. Output is decoded as UTF-8; bytes that are not valid
        UTF-8 (e.g. Latin-1 ref names) become U+FFFD.

        Args:
            arguments: Git arguments, e.g. ['status', '--porcelain']
            check: Raise CommandFailed on failure. When False, the failure
                is reported through CommandResult.succeeded instead.

        Returns:
            CommandResult with stdout (trailing whitespace removed)

        Raises:
            CommandFailed: If check is set and git exits non-zero with a
                non-empty stderr, or cannot be started at all
        """
        command = self.build_command(arguments)
        logger.debug(f"Running {' '.join(command)} in {self.working_dir}")

        try:
            result = subprocess.run(
                command,
                cwd=self.working_dir,
                capture_output=True,
                encoding='utf-8',
                errors='replace',
                shell=False,
                check=False,
            )
        except OSError as e:
            logger.debug(f"Could not start {command[0]}: {e}")
            if check:
                raise CommandFailed(str(e), command, -1) from e
            return CommandResult(stdout="", stderr=str(e), returncode=-1, succeeded=False)

        stdout = (result.stdout or "").rstrip()
        stderr = result.stderr or ""

        failed = result.returncode != 0 and bool(stderr.strip())
        if failed:
            logger.debug(f"Command failed with exit code {result.returncode}: {stderr.strip()}")
            if check:
                raise CommandFailed(stderr, command, result.returncode)
        elif result.returncode != 0:
            logger.debug(f"Exit code {result.returncode} with empty stderr, treating as success")

        return CommandResult(
            stdout=stdout,
            stderr=stderr,
            returncode=result.returncode,
            succeeded=not failed,
        )
