"""
Editor launcher — resolves the configured editor and runs it on a file,
attached to the current terminal, until it exits.
"""

from __future__ import annotations

import logging
import shlex
import shutil
import subprocess
from abc import ABC, abstractmethod

from ..errors import EditorNotFoundError, EditorSpawnError, EditorWaitError

logger = logging.getLogger(__name__)


class ProcessRunner(ABC):
    """Runs an external program to completion."""

    @abstractmethod
    def run(self, argv: list[str]) -> int:
        """Run *argv*, block until it exits and return its exit status.

        Raises EditorSpawnError if the program cannot be started and
        EditorWaitError if waiting for it fails.
        """


class SubprocessRunner(ProcessRunner):
    """Runs the program with the terminal's stdin/stdout/stderr."""

    def run(self, argv: list[str]) -> int:
        try:
            proc = subprocess.Popen(argv)
        except (OSError, ValueError) as exc:
            raise EditorSpawnError(f"Unable to start {argv[0]}: {exc}") from exc
        try:
            # No timeout: the user may edit for as long as they like
            return proc.wait()
        except (OSError, subprocess.SubprocessError) as exc:
            raise EditorWaitError(f"Error waiting for {argv[0]}: {exc}") from exc


class EditorLauncher:
    """Resolve an editor command once, then launch it on scratch files."""

    def __init__(self, runner: ProcessRunner | None = None) -> None:
        self._runner = runner or SubprocessRunner()

    @staticmethod
    def resolve(editor: str) -> list[str]:
        """Return the argv prefix for *editor*.

        The first word is looked up on the search path (like
        ``command -v``); any further words are kept as arguments, so
        ``"code --wait"`` works.
        """
        try:
            words = shlex.split(editor)
        except ValueError as exc:
            raise EditorNotFoundError(f"Invalid editor command {editor!r}: {exc}") from exc
        if not words:
            raise EditorNotFoundError("No editor configured")

        executable = shutil.which(words[0])
        if executable is None:
            raise EditorNotFoundError(f"Editor not found on PATH: {words[0]}")
        logger.debug("[Editor] Resolved %s -> %s", words[0], executable)
        return [executable] + words[1:]

    def launch(self, command: list[str], path: str) -> None:
        """Run the resolved *command* on *path* and wait for it to exit."""
        argv = list(command) + [path]
        logger.info("[Editor] Launching %s", " ".join(argv))
        status = self._runner.run(argv)
        if status != 0:
            # The file content decides whether the edit is usable
            logger.warning("[Editor] %s exited with status %d", command[0], status)
