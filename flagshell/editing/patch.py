"""
Patch model — JSON patch operations and the commented patch request
sent to the REST API.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

OP_ADD = "add"
OP_REMOVE = "remove"
OP_REPLACE = "replace"

_OPS = (OP_ADD, OP_REMOVE, OP_REPLACE)


@dataclass(frozen=True)
class PatchOperation:
    """One add/remove/replace instruction addressed by a JSON pointer."""
    op: str
    path: str
    value: Any = None

    def __post_init__(self) -> None:
        if self.op not in _OPS:
            raise ValueError(f"Unsupported patch op: {self.op!r}")

    def to_dict(self) -> dict:
        data = {"op": self.op, "path": self.path}
        if self.op != OP_REMOVE:
            data["value"] = self.value
        return data


@dataclass
class PatchComment:
    """Ordered patch operations plus the user's change comment."""
    patch: list[PatchOperation] = field(default_factory=list)
    comment: str = ""

    def to_dict(self) -> dict:
        return {
            "comment": self.comment,
            "patch": [op.to_dict() for op in self.patch],
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict())


def assemble_patch(ops: list[PatchOperation], comment: str) -> PatchComment:
    """Package *ops* and *comment* into a :class:`PatchComment`.

    Raises ``ValueError`` when *ops* is empty: "no change" must never be
    sent as an empty patch.
    """
    if not ops:
        raise ValueError("Cannot assemble an empty patch")
    return PatchComment(patch=list(ops), comment=comment)
