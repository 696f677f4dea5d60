"""Shared fixtures for gitrepo tests."""

import pytest

from gitrepo.config import get_default_config
from gitrepo.infra.command_runner import CommandResult
from gitrepo.repository import Repository


class ScriptedRunner:
    """
    Stand-in for CommandRunner that replays canned git output.

    Responses are keyed by the exact argument tuple. A list of responses is
    consumed one per call, the last one repeating. An exception instance is
    raised instead of returned.
    """

    def __init__(self, working_dir="/repo", executable="git"):
        self.working_dir = working_dir
        self.executable = executable
        self.responses = {}
        self.calls = []

    def respond(self, arguments, *outputs):
        self.responses[tuple(arguments)] = list(outputs)

    def execute(self, arguments, check=True):
        self.calls.append(list(arguments))
        queue = self.responses.get(tuple(arguments), [""])
        output = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(output, Exception):
            raise output
        return CommandResult(stdout=output)

    def count(self, arguments):
        return sum(1 for call in self.calls if call == list(arguments))


@pytest.fixture
def runner():
    return ScriptedRunner()


@pytest.fixture
def repo_dir(tmp_path):
    path = tmp_path / "project"
    (path / ".git").mkdir(parents=True)
    return path


@pytest.fixture
def repo(repo_dir, runner, monkeypatch):
    """A Repository over a fake .git directory, wired to the scripted runner."""
    def make_runner(working_dir, executable):
        runner.working_dir = working_dir
        runner.executable = executable
        return runner

    monkeypatch.setattr("gitrepo.repository.CommandRunner", make_runner)
    return Repository(repo_dir, config=get_default_config())
