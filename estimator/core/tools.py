"""Tool resolution: which drawing kind a catalog option's tool produces."""

from __future__ import annotations
from collections.abc import Iterable

from pydantic import BaseModel

from estimator.models import (
    CatalogOption, Category, ElementKind, StrokeMode, ToolKindTable,
)


class ActiveTool(BaseModel):
    """The drawing tool currently selected on the canvas."""
    option_id: str
    label: str
    kind: ElementKind
    stroke: StrokeMode = StrokeMode.FREEHAND


def drawing_kind_for(option: CatalogOption, table: ToolKindTable | None = None) -> ElementKind:
    """
    Resolve an option's drawing kind.

    Order: the option's own `drawing_kind`, then the
    `<category>:<variant>` entry, then the category default.
    """
    if option.drawing_kind is not None:
        return option.drawing_kind
    if table is None:
        table = ToolKindTable()
    if option.variant:
        kind = table.by_variant.get(f"{option.category.value}:{option.variant}")
        if kind is not None:
            return kind
    return table.by_category.get(option.category, ElementKind.SEGMENT)


def tool_for(option: CatalogOption, table: ToolKindTable | None = None) -> ActiveTool:
    return ActiveTool(
        option_id=option.id,
        label=option.name,
        kind=drawing_kind_for(option, table),
        stroke=option.stroke,
    )


def visible_options(
    options: Iterable[CatalogOption],
    category: Category | None = None,
    wall_height: float | None = None,
    include_inactive: bool = False,
) -> list[CatalogOption]:
    """
    Options offered in the tool panel, sorted by name.

    Fabrics are narrowed to panels at least as tall as the wall.
    """
    result: list[CatalogOption] = []
    for option in options:
        if category is not None and option.category != category:
            continue
        if not include_inactive and not option.is_active:
            continue
        if (
            wall_height is not None
            and option.category == Category.FABRIC
            and not option.fits_wall_height(wall_height)
        ):
            continue
        result.append(option)
    result.sort(key=lambda o: o.name)
    return result
