"""Shared fakes: a scripted console and an editor that rewrites its file."""

import os

import pytest

from flagshell.console import Console
from flagshell.editing.launcher import ProcessRunner


class ScriptedConsole(Console):
    """Console that answers prompts from a list and records all output.

    An exception (class or instance) in the list is raised at its prompt.
    """

    def __init__(self, answers=None):
        self.answers = list(answers or [])
        self.prompts: list[str] = []
        self.output: list[str] = []

    def read_line(self, prompt: str = "") -> str:
        self.prompts.append(prompt)
        if not self.answers:
            raise AssertionError(f"Unexpected prompt: {prompt!r}")
        answer = self.answers.pop(0)
        if isinstance(answer, BaseException) or (
                isinstance(answer, type) and issubclass(answer, BaseException)):
            raise answer
        return answer

    def write(self, text: str) -> None:
        self.output.append(text)

    @property
    def text(self) -> str:
        return "".join(self.output)


class FakeEditor(ProcessRunner):
    """Replaces the scratch file content with the next scripted output.

    ``None`` leaves the file untouched (save without changes) and
    ``FakeEditor.DELETE`` removes it.
    """

    DELETE = object()

    def __init__(self, outputs, exit_status: int = 0):
        self.outputs = list(outputs)
        self.exit_status = exit_status
        self.seeds: list[bytes] = []
        self.paths: list[str] = []
        self.argvs: list[list[str]] = []

    def run(self, argv: list[str]) -> int:
        path = argv[-1]
        self.argvs.append(list(argv))
        self.paths.append(path)
        with open(path, "rb") as f:
            self.seeds.append(f.read())

        output = self.outputs.pop(0)
        if output is self.DELETE:
            os.unlink(path)
        elif output is not None:
            if isinstance(output, str):
                output = output.encode("utf-8")
            with open(path, "wb") as f:
                f.write(output)
        return self.exit_status


@pytest.fixture
def make_console():
    return ScriptedConsole


@pytest.fixture
def make_editor():
    return FakeEditor
