"""
JSON diff — computes the add/remove/replace operations that turn one JSON
document into another, and applies such operations to a document.

Paths are JSON pointers (RFC 6901).  Output order is deterministic:
object keys follow document order, array elements are matched by longest
common subsequence and the gaps between matches are walked by index.
"""

from __future__ import annotations

import copy
import json
import logging
from typing import Any

from ..errors import InvalidDocumentError, PatchApplyError
from .patch import OP_ADD, OP_REMOVE, OP_REPLACE, PatchOperation

logger = logging.getLogger(__name__)

# Above this many element comparisons, array windows are paired by position
_LCS_LIMIT = 250_000


def _reject_constant(name: str):
    # json.loads accepts NaN / Infinity, which are not JSON
    raise ValueError(f"Invalid JSON constant: {name}")


def parse_document(data: bytes | str) -> Any:
    """Parse *data* as JSON, raising InvalidDocumentError on failure."""
    try:
        return json.loads(data, parse_constant=_reject_constant)
    except ValueError as exc:
        # JSONDecodeError and UnicodeDecodeError are both ValueErrors
        raise InvalidDocumentError(f"Invalid JSON Document: {exc}") from exc


def escape_pointer_token(token: str) -> str:
    return token.replace("~", "~0").replace("/", "~1")


def unescape_pointer_token(token: str) -> str:
    return token.replace("~1", "/").replace("~0", "~")


def _kind(value: Any) -> str:
    # bool is checked first: True must never compare equal to 1
    if isinstance(value, bool):
        return "boolean"
    if value is None:
        return "null"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    raise TypeError(f"Not a JSON value: {type(value).__name__}")


def json_equal(a: Any, b: Any) -> bool:
    """Structural JSON equality (key order and formatting are irrelevant)."""
    kind = _kind(a)
    if kind != _kind(b):
        return False
    if kind == "object":
        if a.keys() != b.keys():
            return False
        return all(json_equal(a[k], b[k]) for k in a)
    if kind == "array":
        return len(a) == len(b) and all(json_equal(x, y) for x, y in zip(a, b))
    return a == b


# ------------------------------------------------------------------
# Diff
# ------------------------------------------------------------------

def create_patch(original: bytes | str,
                 candidate: bytes | str) -> list[PatchOperation] | None:
    """Return the operations transforming *original* into *candidate*.

    Parameters
    ----------
    original:
        The document as fetched.
    candidate:
        The document as edited.

    Returns
    -------
    list[PatchOperation] | None
        The ordered operations, or None when both documents are
        semantically identical.

    Raises
    ------
    InvalidDocumentError
        If either input does not parse as JSON.
    PatchApplyError
        If the computed operations do not reproduce *candidate*.
    """
    source = parse_document(original)
    target = parse_document(candidate)

    ops = diff_values(source, target)
    if not ops:
        return None
    if not json_equal(apply_patch(source, ops), target):
        raise PatchApplyError("Computed patch does not reproduce the edited document")
    logger.debug("[Diff] %d operation(s): %s",
                 len(ops), ", ".join(f"{o.op} {o.path}" for o in ops))
    return ops


def diff_values(source: Any, target: Any, path: str = "") -> list[PatchOperation]:
    """Diff two already-parsed JSON values rooted at *path*."""
    ops: list[PatchOperation] = []
    _diff(source, target, path, ops)
    return ops


def _diff(a: Any, b: Any, path: str, ops: list[PatchOperation]) -> None:
    if json_equal(a, b):
        return
    kind = _kind(a)
    if kind == _kind(b) == "object":
        _diff_objects(a, b, path, ops)
    elif kind == _kind(b) == "array":
        _diff_arrays(a, b, path, ops)
    else:
        ops.append(PatchOperation(OP_REPLACE, path, b))


def _diff_objects(a: dict, b: dict, path: str, ops: list[PatchOperation]) -> None:
    for key, value in a.items():
        child = f"{path}/{escape_pointer_token(key)}"
        if key in b:
            _diff(value, b[key], child, ops)
        else:
            ops.append(PatchOperation(OP_REMOVE, child))
    for key, value in b.items():
        if key not in a:
            ops.append(PatchOperation(
                OP_ADD, f"{path}/{escape_pointer_token(key)}", value))


def _diff_arrays(a: list, b: list, path: str, ops: list[PatchOperation]) -> None:
    # Skip the unchanged prefix and suffix, then work on the middle window
    start = 0
    while start < len(a) and start < len(b) and json_equal(a[start], b[start]):
        start += 1

    end_a, end_b = len(a), len(b)
    while end_a > start and end_b > start and json_equal(a[end_a - 1], b[end_b - 1]):
        end_a -= 1
        end_b -= 1

    old = a[start:end_a]
    new = b[start:end_b]

    # Elements kept by the longest common subsequence stay in place; the
    # gaps between them are diffed.  A sentinel closes the last gap.
    pos = start
    i = j = 0
    for match_i, match_j in _common_subsequence(old, new) + [(len(old), len(new))]:
        pos = _diff_gap(old[i:match_i], new[j:match_j], path, pos, ops)
        if match_i < len(old):
            pos += 1
        i, j = match_i + 1, match_j + 1


def _common_subsequence(a: list, b: list) -> list[tuple[int, int]]:
    """Index pairs of a longest common subsequence of *a* and *b*."""
    m, n = len(a), len(b)
    if m == 0 or n == 0 or m * n > _LCS_LIMIT:
        return []

    # lengths[i][j] is the LCS length of a[i:] and b[j:]
    lengths = [[0] * (n + 1) for _ in range(m + 1)]
    for i in range(m - 1, -1, -1):
        for j in range(n - 1, -1, -1):
            if json_equal(a[i], b[j]):
                lengths[i][j] = lengths[i + 1][j + 1] + 1
            else:
                lengths[i][j] = max(lengths[i + 1][j], lengths[i][j + 1])

    pairs: list[tuple[int, int]] = []
    i = j = 0
    while i < m and j < n:
        if json_equal(a[i], b[j]):
            pairs.append((i, j))
            i += 1
            j += 1
        elif lengths[i + 1][j] >= lengths[i][j + 1]:
            i += 1
        else:
            j += 1
    return pairs


def _diff_gap(old: list, new: list, path: str, pos: int,
              ops: list[PatchOperation]) -> int:
    """Turn *old* into *new* starting at index *pos*; return the next index."""
    common = min(len(old), len(new))
    for k in range(common):
        _diff(old[k], new[k], f"{path}/{pos + k}", ops)
    pos += common

    if len(new) > common:
        # Ascending: each insert lands right before the rest of the array
        for value in new[common:]:
            ops.append(PatchOperation(OP_ADD, f"{path}/{pos}", value))
            pos += 1
    else:
        # Descending so earlier indices stay valid
        for k in range(len(old) - 1, common - 1, -1):
            ops.append(PatchOperation(OP_REMOVE, f"{path}/{pos + k - common}"))
    return pos


# ------------------------------------------------------------------
# Apply
# ------------------------------------------------------------------

def _split_pointer(path: str) -> list[str]:
    if path == "":
        return []
    if not path.startswith("/"):
        raise PatchApplyError(f"Invalid JSON pointer: {path!r}")
    return [unescape_pointer_token(t) for t in path[1:].split("/")]


def _array_index(token: str, container: list, allow_end: bool) -> int:
    if allow_end and token == "-":
        return len(container)
    if not token.isdigit() or (len(token) > 1 and token.startswith("0")):
        raise PatchApplyError(f"Invalid array index: {token!r}")
    index = int(token)
    limit = len(container) if allow_end else len(container) - 1
    if index > limit:
        raise PatchApplyError(f"Array index out of range: {index}")
    return index


def _resolve_parent(document: Any, tokens: list[str], path: str) -> Any:
    node = document
    for token in tokens[:-1]:
        if isinstance(node, dict):
            if token not in node:
                raise PatchApplyError(f"Path not found: {path}")
            node = node[token]
        elif isinstance(node, list):
            node = node[_array_index(token, node, allow_end=False)]
        else:
            raise PatchApplyError(f"Path not found: {path}")
    return node


def apply_patch(document: Any, operations: list[PatchOperation]) -> Any:
    """Apply *operations* in order to a copy of *document* and return it."""
    result = copy.deepcopy(document)
    for op in operations:
        result = _apply_one(result, op)
    return result


def _apply_one(document: Any, op: PatchOperation) -> Any:
    tokens = _split_pointer(op.path)
    if not tokens:
        if op.op == OP_REMOVE:
            raise PatchApplyError("Cannot remove the document root")
        return copy.deepcopy(op.value)

    parent = _resolve_parent(document, tokens, op.path)
    last = tokens[-1]

    if isinstance(parent, dict):
        if op.op != OP_ADD and last not in parent:
            raise PatchApplyError(f"Path not found: {op.path}")
        if op.op == OP_REMOVE:
            del parent[last]
        else:
            parent[last] = copy.deepcopy(op.value)
    elif isinstance(parent, list):
        index = _array_index(last, parent, allow_end=(op.op == OP_ADD))
        if op.op == OP_ADD:
            parent.insert(index, copy.deepcopy(op.value))
        elif op.op == OP_REMOVE:
            del parent[index]
        else:
            parent[index] = copy.deepcopy(op.value)
    else:
        raise PatchApplyError(f"Path not found: {op.path}")
    return document
