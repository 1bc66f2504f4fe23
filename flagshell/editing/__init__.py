"""Edit-diff-patch workflow — edit JSON in an external editor, emit a JSON patch."""

from .patch import PatchOperation, PatchComment, assemble_patch
from .json_diff import create_patch, apply_patch, json_equal, parse_document
from .workspace import TemporaryWorkspace, ScratchFile
from .loader import load_document
from .launcher import EditorLauncher, ProcessRunner, SubprocessRunner
from .retry import EditController, EditState, EditOutcome, EditResult, EditSession
from .workflow import edit_document, run_edit_session

__all__ = [
    "PatchOperation", "PatchComment", "assemble_patch",
    "create_patch", "apply_patch", "json_equal", "parse_document",
    "TemporaryWorkspace", "ScratchFile",
    "load_document",
    "EditorLauncher", "ProcessRunner", "SubprocessRunner",
    "EditController", "EditState", "EditOutcome", "EditResult", "EditSession",
    "edit_document", "run_edit_session",
]
