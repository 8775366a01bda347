"""Inspection of page content snapshots.

A snapshot maps node ids to node records. The ``ROOT`` node is the entry
point; children are referenced by id through ``nodes`` (ordered list) and
``linkedNodes`` (named slots). A node's component type is either a string
``type`` or ``type.resolvedName``.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from app.domain.entities import AIMetadata, ComponentsDiff, SizeDiff
from app.domain.errors import ValidationError

ROOT_NODE = "ROOT"

IMAGE_COMPONENT = "Image"
BUTTON_COMPONENT = "CraftButton"
TEXT_COMPONENT = "Text"

MEDIUM_COMPLEXITY_TYPES = 5
HIGH_COMPLEXITY_TYPES = 10


def parse_snapshot(content: str | Mapping[str, Any]) -> dict[str, Any]:
    """Return ``content`` as a dictionary, decoding JSON text when needed."""

    if isinstance(content, (str, bytes)):
        try:
            decoded = json.loads(content)
        except json.JSONDecodeError as exc:
            raise ValidationError(f"Content snapshot is not valid JSON: {exc.msg}") from exc
    else:
        decoded = content
    if not isinstance(decoded, Mapping):
        raise ValidationError("Content snapshot must be a JSON object")
    return dict(decoded)


def serialized_size(snapshot: Mapping[str, Any]) -> int:
    """Byte length of the compact UTF-8 JSON encoding of ``snapshot``."""

    encoded = json.dumps(snapshot, separators=(",", ":"), ensure_ascii=False)
    return len(encoded.encode("utf-8"))


def _node_type(node: Mapping[str, Any]) -> str | None:
    declared = node.get("type")
    if isinstance(declared, str):
        return declared or None
    if isinstance(declared, Mapping):
        resolved = declared.get("resolvedName")
        if isinstance(resolved, str) and resolved:
            return resolved
    return None


def _child_ids(node: Mapping[str, Any]) -> list[str]:
    children: list[str] = []
    nodes = node.get("nodes")
    if isinstance(nodes, list):
        children.extend(child for child in nodes if isinstance(child, str))
    linked = node.get("linkedNodes")
    if isinstance(linked, Mapping):
        children.extend(child for child in linked.values() if isinstance(child, str))
    return children


def extract_component_types(snapshot: Mapping[str, Any]) -> tuple[str, ...]:
    """Collect the component types reachable from the root, each once."""

    types: dict[str, None] = {}
    visited: set[str] = set()
    pending = [ROOT_NODE]
    while pending:
        node_id = pending.pop()
        if node_id in visited:
            continue
        visited.add(node_id)
        node = snapshot.get(node_id)
        if not isinstance(node, Mapping):
            continue
        node_type = _node_type(node)
        if node_type is not None:
            types.setdefault(node_type, None)
        # Reverse so children are visited in document order.
        pending.extend(reversed(_child_ids(node)))
    return tuple(types)


def _layout_style(component_types: tuple[str, ...]) -> str:
    if any("Grid" in name for name in component_types):
        return "grid"
    if any("Flex" in name for name in component_types):
        return "flexbox"
    return "basic"


def _complexity(component_types: tuple[str, ...]) -> str:
    if len(component_types) > HIGH_COMPLEXITY_TYPES:
        return "high"
    if len(component_types) > MEDIUM_COMPLEXITY_TYPES:
        return "medium"
    return "low"


def analyze_snapshot(snapshot: Mapping[str, Any]) -> AIMetadata:
    component_types = extract_component_types(snapshot)
    return AIMetadata(
        component_types=component_types,
        layout_style=_layout_style(component_types),
        complexity=_complexity(component_types),
        has_images=IMAGE_COMPONENT in component_types,
        has_buttons=BUTTON_COMPONENT in component_types,
        has_text=TEXT_COMPONENT in component_types,
        is_responsive=True,
    )


def _root_children(snapshot: Mapping[str, Any]) -> Any:
    root = snapshot.get(ROOT_NODE)
    if isinstance(root, Mapping):
        return root.get("nodes")
    return None


def describe_changes(
    before: Mapping[str, Any], after: Mapping[str, Any]
) -> tuple[tuple[str, ...], bool]:
    """Summarise how ``after`` differs from ``before``.

    Returns the human readable change list and whether the root's children
    changed.
    """

    changes: list[str] = []
    delta = len(after) - len(before)
    if delta > 0:
        changes.append(f"added {delta} components")
    elif delta < 0:
        changes.append(f"removed {-delta} components")
    root_changed = _root_children(before) != _root_children(after)
    if root_changed:
        changes.append("layout structure modified")
    return tuple(changes), root_changed


def diff_components(
    before: Mapping[str, Any], after: Mapping[str, Any]
) -> ComponentsDiff:
    old_types = extract_component_types(before)
    new_types = extract_component_types(after)
    return ComponentsDiff(
        added=tuple(name for name in new_types if name not in old_types),
        removed=tuple(name for name in old_types if name not in new_types),
        unchanged=tuple(name for name in old_types if name in new_types),
    )


def diff_size(before: Mapping[str, Any], after: Mapping[str, Any]) -> SizeDiff:
    size_a = serialized_size(before)
    size_b = serialized_size(after)
    return SizeDiff(size_a=size_a, size_b=size_b, difference=size_b - size_a)


__all__ = [
    "analyze_snapshot",
    "describe_changes",
    "diff_components",
    "diff_size",
    "extract_component_types",
    "parse_snapshot",
    "serialized_size",
]
