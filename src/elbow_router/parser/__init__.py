"""Scene model and scene file parsing."""

from elbow_router.parser.model import (
    ArrowElement,
    BindableElement,
    Binding,
    ElbowArrowUpdate,
    ElementType,
    Scene,
)
from elbow_router.parser.scene import parse_scene, scene_to_json

__all__ = [
    "ArrowElement",
    "BindableElement",
    "Binding",
    "ElbowArrowUpdate",
    "ElementType",
    "Scene",
    "parse_scene",
    "scene_to_json",
]
