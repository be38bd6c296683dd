"""Data model for diagram scenes with bindable shapes and elbow arrows."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum

import networkx as nx

from elbow_router.layout.geometry import Bounds, Point


class ElementType(Enum):
    """Discriminant of a scene element."""

    RECTANGLE = "rectangle"
    DIAMOND = "diamond"
    ELLIPSE = "ellipse"
    IMAGE = "image"
    FRAME = "frame"
    MAGICFRAME = "magicframe"
    EMBEDDABLE = "embeddable"
    IFRAME = "iframe"
    TEXT = "text"
    ARROW = "arrow"


BINDABLE_TYPES: frozenset[ElementType] = frozenset(
    t for t in ElementType if t is not ElementType.ARROW
)
"""Element types an arrow endpoint may bind to."""


@dataclass(frozen=True)
class BindableElement:
    """A shape an arrow endpoint can be attached to.

    Owned by the scene; the router only reads it.
    """

    id: str
    type: ElementType
    x: float
    y: float
    width: float
    height: float
    angle: float = 0.0
    background_color: str = "transparent"
    is_deleted: bool = False


@dataclass(frozen=True)
class Binding:
    """Logical attachment of an arrow endpoint to a shape boundary."""

    element_id: str
    gap: float = 0.0


@dataclass(frozen=True)
class ArrowElement:
    """An arrow whose points are stored relative to (x, y).

    The first point is the start and the last point is the end. A single
    point means the arrow is still being created.
    """

    id: str
    x: float
    y: float
    points: tuple[Point, ...] = ((0.0, 0.0),)
    width: float = 0.0
    height: float = 0.0
    angle: float = 0.0
    start_binding: Binding | None = None
    end_binding: Binding | None = None
    start_arrowhead: str | None = None
    end_arrowhead: str | None = "arrow"
    elbowed: bool = True
    is_deleted: bool = False

    @property
    def type(self) -> ElementType:
        return ElementType.ARROW


SceneElement = BindableElement | ArrowElement


@dataclass(frozen=True)
class ElbowArrowUpdate:
    """Proposed new geometry for an arrow, committed by the caller at once."""

    points: tuple[Point, ...]
    x: float
    y: float
    width: float
    height: float

    def apply_to(self, arrow: ArrowElement) -> ArrowElement:
        """Return *arrow* with this geometry; identity and bindings are kept."""
        return replace(
            arrow,
            points=self.points,
            x=self.x,
            y=self.y,
            width=self.width,
            height=self.height,
        )


@dataclass
class Scene:
    """Ordered collection of scene elements, bottom of the z-order first.

    Passed explicitly to the router as its read-only snapshot of the
    surrounding diagram.
    """

    elements: list[SceneElement] = field(default_factory=list)

    def add_element(self, element: SceneElement) -> None:
        self.elements.append(element)

    def get_non_deleted_elements(self) -> list[SceneElement]:
        return [el for el in self.elements if not el.is_deleted]

    def get_non_deleted_elements_map(self) -> dict[str, SceneElement]:
        return {el.id: el for el in self.elements if not el.is_deleted}

    def get_element(self, element_id: str) -> SceneElement | None:
        """Return the non-deleted element with this id, or None."""
        return self.get_non_deleted_elements_map().get(element_id)

    def arrows(self) -> list[ArrowElement]:
        """Non-deleted arrows in z-order."""
        return [
            el for el in self.get_non_deleted_elements()
            if isinstance(el, ArrowElement)
        ]

    def bindable_elements(self) -> list[BindableElement]:
        """Non-deleted shapes arrows may bind to, in z-order."""
        return [
            el for el in self.get_non_deleted_elements()
            if isinstance(el, BindableElement) and el.type in BINDABLE_TYPES
        ]

    def get_element_bounds(self, element: SceneElement) -> Bounds:
        """Rotation-aware axis-aligned bounds of an element."""
        from elbow_router.layout.binding import aabb_for_element

        return aabb_for_element(element)

    def get_hovered_element_for_binding(self, point: Point) -> BindableElement | None:
        """Topmost bindable element close enough to *point* to bind to."""
        from elbow_router.layout.binding import get_hovered_element_for_binding

        return get_hovered_element_for_binding(point, self.get_non_deleted_elements())

    def mutate_element(self, element_id: str, update: ElbowArrowUpdate) -> ArrowElement:
        """Commit a routed update by replacing the arrow in place.

        Raises KeyError when no arrow with this id exists.
        """
        for i, el in enumerate(self.elements):
            if el.id == element_id and isinstance(el, ArrowElement):
                updated = update.apply_to(el)
                self.elements[i] = updated
                return updated
        raise KeyError(f"No arrow with id '{element_id}' in scene")

    def binding_graph(self) -> nx.DiGraph:
        """Directed graph from every bound element id to its arrows."""
        G = nx.DiGraph()
        for el in self.get_non_deleted_elements():
            G.add_node(el.id)
        for arrow in self.arrows():
            for binding in (arrow.start_binding, arrow.end_binding):
                if binding is not None:
                    G.add_edge(binding.element_id, arrow.id)
        return G
