"""
Retry controller — the edit/validate/prompt state machine.

The user's edits are never discarded on a parse or read failure: the
candidate bytes become the seed for the next editor session until the
user produces valid JSON or declines to continue.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from ..console import Console
from ..errors import DocumentReadError, InvalidDocumentError, PatchApplyError
from .json_diff import create_patch
from .launcher import EditorLauncher
from .patch import PatchComment, PatchOperation, assemble_patch
from .workspace import TemporaryWorkspace

logger = logging.getLogger(__name__)


class EditState(Enum):
    EDITING = "editing"
    VALIDATING = "validating"
    PROMPT_RETRY = "prompt_retry"
    SUCCESS = "success"
    ABORTED = "aborted"


TERMINAL_STATES = (EditState.SUCCESS, EditState.ABORTED)


class EditOutcome(Enum):
    APPLIED = "applied"
    NO_CHANGE = "no_change"
    ABORTED = "aborted"


@dataclass
class EditSession:
    """Per-run state.  ``original`` is never modified."""
    original: bytes
    current: bytes
    attempts: int = 0


@dataclass
class EditResult:
    """Three-way result of one edit run."""
    outcome: EditOutcome
    patch: PatchComment | None = None
    attempts: int = 0


def collect_comment(console: Console) -> str:
    """Ask for a one-line change comment.  Any input, even empty, is kept."""
    return console.read_line("Enter comment: ")


class EditController:
    """Drives one edit session through :class:`EditState`.

    Call :meth:`step` to perform a single transition or :meth:`run` to
    loop until a terminal state.  Editor spawn/wait errors propagate out
    of :meth:`step` unchanged; the scratch file is released first.
    """

    def __init__(
        self,
        original: bytes,
        command: list[str],
        launcher: EditorLauncher,
        workspace: TemporaryWorkspace,
        console: Console,
    ) -> None:
        self.session = EditSession(original=bytes(original), current=bytes(original))
        self.state = EditState.EDITING
        self._command = command
        self._launcher = launcher
        self._workspace = workspace
        self._console = console

        self._candidate: bytes | None = None
        self._read_error: DocumentReadError | None = None
        self._parse_error: InvalidDocumentError | PatchApplyError | None = None
        self._ops: list[PatchOperation] | None = None

    @property
    def operations(self) -> list[PatchOperation] | None:
        """Operations found in SUCCESS, or None for "no change"."""
        return self._ops

    def step(self) -> EditState:
        handlers = {
            EditState.EDITING: self._edit,
            EditState.VALIDATING: self._validate,
            EditState.PROMPT_RETRY: self._prompt_retry,
        }
        if self.state in TERMINAL_STATES:
            return self.state
        previous = self.state
        self.state = handlers[self.state]()
        logger.debug("[Edit] %s -> %s", previous.value, self.state.value)
        return self.state

    def run(self) -> EditResult:
        while self.state not in TERMINAL_STATES:
            self.step()

        attempts = self.session.attempts
        if self.state is EditState.ABORTED:
            logger.info("[Edit] Aborted after %d attempt(s)", attempts)
            return EditResult(EditOutcome.ABORTED, attempts=attempts)
        if not self._ops:
            logger.info("[Edit] No changes after %d attempt(s)", attempts)
            return EditResult(EditOutcome.NO_CHANGE, attempts=attempts)

        try:
            comment = collect_comment(self._console)
        except (EOFError, KeyboardInterrupt):
            self._console.println("")
            self._console.println("Edit aborted")
            logger.info("[Edit] Comment prompt closed after %d attempt(s)", attempts)
            return EditResult(EditOutcome.ABORTED, attempts=attempts)
        patch = assemble_patch(self._ops, comment)
        logger.info("[Edit] %d operation(s) after %d attempt(s)",
                    len(patch.patch), attempts)
        return EditResult(EditOutcome.APPLIED, patch=patch, attempts=attempts)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def _edit(self) -> EditState:
        self.session.attempts += 1
        self._candidate = None
        self._read_error = None
        self._parse_error = None

        with self._workspace.scratch(self.session.current) as scratch:
            self._launcher.launch(self._command, scratch.path)
            try:
                self._candidate = self._workspace.read(scratch)
            except DocumentReadError as exc:
                self._read_error = exc
        return EditState.VALIDATING

    def _validate(self) -> EditState:
        if self._read_error is not None:
            return EditState.PROMPT_RETRY
        try:
            self._ops = create_patch(self.session.original, self._candidate)
        except InvalidDocumentError as exc:
            logger.info("[Edit] Attempt %d: %s", self.session.attempts, exc)
            self._parse_error = exc
            self._ops = None
            return EditState.PROMPT_RETRY
        except PatchApplyError as exc:
            logger.warning("[Edit] Attempt %d: %s", self.session.attempts, exc)
            self._console.println(f"Unable to create patch: {exc}")
            self._parse_error = exc
            self._ops = None
            return EditState.PROMPT_RETRY
        return EditState.SUCCESS

    def _prompt_retry(self) -> EditState:
        if self._read_error is not None:
            self._console.println(str(self._read_error))
            question = "Try again?"
        elif isinstance(self._parse_error, PatchApplyError):
            question = "Make changes?"
        else:
            question = "Unable to parse json. Make changes?"

        try:
            again = self._console.ask_yes_no(question)
        except (EOFError, KeyboardInterrupt):
            # A closed or interrupted prompt counts as "no"
            self._console.println("")
            again = False
        if not again:
            self._console.println("Edit aborted")
            return EditState.ABORTED

        # Keep the user's (invalid) edits as the next seed
        if self._candidate is not None:
            self.session.current = self._candidate
        return EditState.EDITING
