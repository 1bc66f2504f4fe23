"""
Edit workflow — edit a JSON document in an external editor and turn the
edits into a commented patch.
"""

from __future__ import annotations

import logging

from ..console import Console
from ..errors import EditAborted
from .launcher import EditorLauncher, ProcessRunner
from .patch import PatchComment
from .retry import EditController, EditOutcome, EditResult
from .workspace import TemporaryWorkspace

logger = logging.getLogger(__name__)


def run_edit_session(
    original: bytes,
    editor: str,
    console: Console | None = None,
    runner: ProcessRunner | None = None,
    temp_dir: str | None = None,
) -> EditResult:
    """Run the edit loop on *original* and return its three-way result.

    The editor is resolved before any scratch file exists, so
    EditorNotFoundError leaves nothing behind.  EditorSpawnError and
    EditorWaitError propagate after the scratch file is removed.
    """
    console = console or Console()
    launcher = EditorLauncher(runner)
    command = launcher.resolve(editor)

    workspace = TemporaryWorkspace(temp_dir, on_warning=console.warn)
    controller = EditController(original, command, launcher, workspace, console)
    return controller.run()


def edit_document(
    original: bytes,
    editor: str,
    console: Console | None = None,
    runner: ProcessRunner | None = None,
    temp_dir: str | None = None,
) -> PatchComment | None:
    """Edit *original* and return the resulting patch.

    Returns None when the edited document is unchanged.  Raises
    EditAborted when the user gives up at a retry prompt.
    """
    result = run_edit_session(original, editor, console=console,
                              runner=runner, temp_dir=temp_dir)
    if result.outcome is EditOutcome.ABORTED:
        raise EditAborted("Edit aborted")
    return result.patch
