"""CLI for elbow-router."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from elbow_router import __version__
from elbow_router.layout.geometry import DOWN, LEFT, RIGHT, UP, Heading
from elbow_router.layout.routing import (
    RouteTrace,
    reroute_bound_arrows,
    route_scene,
)
from elbow_router.layout.routing.common import to_world
from elbow_router.layout.routing.dongle import resolve_endpoints
from elbow_router.parser import Scene, parse_scene, scene_to_json
from elbow_router.parser.model import ArrowElement, BindableElement
from elbow_router.render import render_svg
from elbow_router.render.constants import CANVAS_PADDING
from elbow_router.themes import THEMES

_HEADING_NAMES: dict[Heading, str] = {
    UP: "up",
    RIGHT: "right",
    DOWN: "down",
    LEFT: "left",
}


def _load_scene(input_file: Path) -> Scene:
    try:
        return parse_scene(input_file.read_text())
    except ValueError as e:
        click.echo(f"Parse error: {e}", err=True)
        raise SystemExit(1)


@click.group()
@click.version_option(version=__version__)
@click.option("-v", "--verbose", count=True,
              help="Log routing details (-v info, -vv debug)")
def cli(verbose: int) -> None:
    """elbow-router: Route orthogonal elbow arrows between diagram shapes."""
    level = logging.WARNING
    if verbose == 1:
        level = logging.INFO
    elif verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


@cli.command()
@click.argument("input_file", type=click.Path(exists=True, path_type=Path))
@click.option("-o", "--output", type=click.Path(path_type=Path), default=None,
              help="Output scene file path. Defaults to stdout")
@click.option("--element", "element_ids", multiple=True,
              help="Only reroute arrows bound to this element (repeatable)")
def route(input_file: Path, output: Path | None, element_ids: tuple[str, ...]) -> None:
    """Route elbow arrows in a scene file and write the updated scene."""
    scene = _load_scene(input_file)

    if element_ids:
        updates = reroute_bound_arrows(scene, element_ids)
        for arrow_id, update in updates.items():
            scene.mutate_element(arrow_id, update)
        routed = len(updates)
    else:
        route_scene(scene)
        routed = sum(1 for arrow in scene.arrows() if arrow.elbowed)

    text = scene_to_json(scene)
    if output is None:
        click.echo(text)
        return

    output.write_text(text)
    click.echo(f"Routed {routed} arrows -> {output}")


@cli.command()
@click.argument("input_file", type=click.Path(exists=True, path_type=Path))
@click.option("-o", "--output", type=click.Path(path_type=Path), default=None,
              help="Output SVG file path. Defaults to <input>.svg")
@click.option("--theme", type=click.Choice(list(THEMES.keys())), default="dark",
              help="Visual theme (default: dark)")
@click.option("--trace/--no-trace", default=False,
              help="Overlay avoidance boxes, dongles and routing steps")
@click.option("--padding", type=float, default=CANVAS_PADDING,
              help=f"Canvas padding around the scene (default: {CANVAS_PADDING:g})")
def render(
    input_file: Path,
    output: Path | None,
    theme: str,
    trace: bool,
    padding: float,
) -> None:
    """Route a scene and render it to SVG."""
    scene = _load_scene(input_file)

    recorder = RouteTrace() if trace else None
    route_scene(scene, recorder)

    svg = render_svg(
        scene,
        THEMES[theme],
        trace=recorder.events if recorder is not None else None,
        padding=padding,
    )

    if output is None:
        output = input_file.with_suffix(".svg")

    output.write_text(svg)
    click.echo(f"Rendered {len(scene.bindable_elements())} shapes, "
               f"{len(scene.arrows())} arrows -> {output}")


@cli.command()
@click.argument("input_file", type=click.Path(exists=True, path_type=Path))
def validate(input_file: Path) -> None:
    """Validate the bindings of a scene file."""
    scene = _load_scene(input_file)
    elements = scene.get_non_deleted_elements_map()

    errors = []
    for arrow in scene.arrows():
        for end, binding in (("start", arrow.start_binding), ("end", arrow.end_binding)):
            if binding is None:
                continue
            target = elements.get(binding.element_id)
            if target is None:
                errors.append(f"Arrow '{arrow.id}' {end} is bound to unknown "
                              f"element '{binding.element_id}'")
            elif not isinstance(target, BindableElement):
                errors.append(f"Arrow '{arrow.id}' {end} is bound to "
                              f"non-bindable element '{binding.element_id}'")

    if errors:
        click.echo("Validation errors:", err=True)
        for err in errors:
            click.echo(f"  - {err}", err=True)
        raise SystemExit(1)

    click.echo(f"Valid: {len(scene.bindable_elements())} shapes, "
               f"{len(scene.arrows())} arrows")


def _describe_endpoint(element: BindableElement | None, heading: Heading | None) -> str:
    if element is None:
        return "(free)"
    name = _HEADING_NAMES[heading] if heading is not None else "none"
    return f"{element.id} [{name}]"


def _describe_arrow(arrow: ArrowElement, scene: Scene) -> str:
    if len(arrow.points) < 2:
        return f"  {arrow.id}: single point"
    resolution = resolve_endpoints(
        arrow,
        scene,
        to_world(arrow, arrow.points[0]),
        to_world(arrow, arrow.points[-1]),
    )
    start = _describe_endpoint(resolution.start_element, resolution.start_heading)
    end = _describe_endpoint(resolution.end_element, resolution.end_heading)
    kind = "elbow" if arrow.elbowed else "straight"
    return f"  {arrow.id} ({kind}, {len(arrow.points)} points): {start} -> {end}"


@cli.command()
@click.argument("input_file", type=click.Path(exists=True, path_type=Path))
def info(input_file: Path) -> None:
    """Show shapes, arrows and resolved endpoint headings of a scene file."""
    scene = _load_scene(input_file)

    shapes = scene.bindable_elements()
    arrows = scene.arrows()
    click.echo(f"Shapes: {len(shapes)}")
    for shape in shapes:
        click.echo(f"  {shape.id} ({shape.type.value}): "
                   f"{shape.width:g}x{shape.height:g} at ({shape.x:g}, {shape.y:g})")
    click.echo(f"Arrows: {len(arrows)}")
    for arrow in arrows:
        click.echo(_describe_arrow(arrow, scene))
