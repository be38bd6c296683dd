"""Parser for Excalidraw-style scene JSON.

Accepts either a full scene document (``{"type": "excalidraw", "elements":
[...]}``) or a bare list of elements. Only the keys the router reads are
parsed; everything else in the document is ignored.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from elbow_router.parser.model import (
    ArrowElement,
    BindableElement,
    Binding,
    ElementType,
    Scene,
    SceneElement,
)

logger = logging.getLogger(__name__)

_ELEMENT_TYPES = {t.value: t for t in ElementType}


def parse_scene(text: str) -> Scene:
    """Parse scene JSON into a Scene.

    Raises ValueError for invalid JSON, a document without an element list,
    or an element missing the geometry the router needs. Elements of types
    the router knows nothing about (free drawing, plain lines) are skipped.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid scene JSON: {e}") from e

    if isinstance(data, dict):
        if "elements" not in data:
            raise ValueError("Scene document has no 'elements' list")
        raw_elements = data["elements"]
    else:
        raw_elements = data

    if not isinstance(raw_elements, list):
        raise ValueError("Scene 'elements' must be a list")

    scene = Scene()
    for index, raw in enumerate(raw_elements):
        if not isinstance(raw, dict):
            raise ValueError(f"Element #{index} is not an object")
        element = _parse_element(raw, index)
        if element is not None:
            scene.add_element(element)
    return scene


def _parse_element(raw: dict[str, Any], index: int) -> SceneElement | None:
    element_id = raw.get("id")
    if not element_id:
        raise ValueError(f"Element #{index} has no 'id'")

    type_name = raw.get("type")
    element_type = _ELEMENT_TYPES.get(type_name)
    if element_type is None:
        logger.debug("Skipping element '%s' of unsupported type %r", element_id, type_name)
        return None

    x = _number(raw, "x", element_id)
    y = _number(raw, "y", element_id)

    if element_type is ElementType.ARROW:
        return ArrowElement(
            id=element_id,
            x=x,
            y=y,
            points=_parse_points(raw.get("points"), element_id),
            width=_number(raw, "width", element_id, 0.0),
            height=_number(raw, "height", element_id, 0.0),
            angle=_number(raw, "angle", element_id, 0.0),
            start_binding=_parse_binding(raw.get("startBinding"), element_id),
            end_binding=_parse_binding(raw.get("endBinding"), element_id),
            start_arrowhead=raw.get("startArrowhead"),
            end_arrowhead=raw.get("endArrowhead", "arrow"),
            elbowed=bool(raw.get("elbowed", False)),
            is_deleted=bool(raw.get("isDeleted", False)),
        )

    return BindableElement(
        id=element_id,
        type=element_type,
        x=x,
        y=y,
        width=_number(raw, "width", element_id),
        height=_number(raw, "height", element_id),
        angle=_number(raw, "angle", element_id, 0.0),
        background_color=raw.get("backgroundColor") or "transparent",
        is_deleted=bool(raw.get("isDeleted", False)),
    )


def _number(
    raw: dict[str, Any],
    key: str,
    element_id: str,
    default: float | None = None,
) -> float:
    value = raw.get(key, default)
    if value is None:
        raise ValueError(f"Element '{element_id}' is missing '{key}'")
    if not _is_number(value):
        raise ValueError(f"Element '{element_id}' has non-numeric '{key}': {value!r}")
    return float(value)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _parse_points(raw: Any, element_id: str) -> tuple[tuple[float, float], ...]:
    if not isinstance(raw, list) or not raw:
        raise ValueError(f"Arrow '{element_id}' needs at least one point")
    points = []
    for p in raw:
        if (
            not isinstance(p, (list, tuple))
            or len(p) != 2
            or not all(_is_number(c) for c in p)
        ):
            raise ValueError(f"Arrow '{element_id}' has a malformed point: {p!r}")
        points.append((float(p[0]), float(p[1])))
    return tuple(points)


def _parse_binding(raw: Any, element_id: str) -> Binding | None:
    if raw is None:
        return None
    if not isinstance(raw, dict) or not raw.get("elementId"):
        raise ValueError(f"Arrow '{element_id}' has a binding without 'elementId'")
    gap = raw.get("gap", 0.0)
    if not _is_number(gap):
        raise ValueError(
            f"Arrow '{element_id}' has non-numeric binding 'gap': {gap!r}"
        )
    return Binding(element_id=raw["elementId"], gap=float(gap))


def _element_to_dict(element: SceneElement) -> dict[str, Any]:
    data: dict[str, Any] = {
        "id": element.id,
        "type": element.type.value,
        "x": element.x,
        "y": element.y,
        "width": element.width,
        "height": element.height,
        "angle": element.angle,
        "isDeleted": element.is_deleted,
    }
    if isinstance(element, BindableElement):
        data["backgroundColor"] = element.background_color
        return data

    data["points"] = [list(p) for p in element.points]
    for key, binding in (
        ("startBinding", element.start_binding),
        ("endBinding", element.end_binding),
    ):
        data[key] = (
            {"elementId": binding.element_id, "gap": binding.gap}
            if binding is not None
            else None
        )
    data["startArrowhead"] = element.start_arrowhead
    data["endArrowhead"] = element.end_arrowhead
    data["elbowed"] = element.elbowed
    return data


def scene_to_json(scene: Scene) -> str:
    """Serialize a scene back to an Excalidraw-style JSON document."""
    document = {
        "type": "excalidraw",
        "version": 2,
        "elements": [_element_to_dict(el) for el in scene.elements],
    }
    return json.dumps(document, indent=2)
