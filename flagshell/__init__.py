"""
flagshell — administer remote feature-flag resources from the terminal.

Public API for library usage::

    from flagshell import edit_document

    patch = edit_document(original_json_bytes, editor="vi")
"""

from .editing import edit_document, run_edit_session, PatchComment, PatchOperation

__version__ = "0.1.0"

__all__ = ["edit_document", "run_edit_session", "PatchComment", "PatchOperation"]
