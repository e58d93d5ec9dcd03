"""Constraint geometry for a horizontal row of star slots.

Host-agnostic: constraints are plain records, so the row layout can be built,
inspected and resolved into frames without a live widget. The Qt adapter in
``star_rating_view.ui`` applies the resolved frames to its labels.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, Optional, Sequence


class Size(NamedTuple):
    width: float
    height: float


ZERO_SIZE = Size(0.0, 0.0)


class Rect(NamedTuple):
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height


class Attribute(Enum):
    LEADING = "leading"
    TRAILING = "trailing"
    TOP = "top"
    BOTTOM = "bottom"


class Relation(Enum):
    EQUAL = "=="
    GREATER_OR_EQUAL = ">="
    LESS_OR_EQUAL = "<="


class ConstraintState(Enum):
    """Where the cached constraint set is in its build/apply cycle."""

    DIRTY = "dirty"      # empty, needs a build
    BUILT = "built"      # built, not yet applied by the host
    APPLIED = "applied"  # built and active on the host


@dataclass
class Constraint:
    """``item.attribute <relation> to_item.to_attribute + constant``.

    ``to_item`` is a slot index, or ``None`` for the container.
    """

    item: int
    attribute: Attribute
    relation: Relation
    to_item: Optional[int]
    to_attribute: Attribute
    constant: float = 0.0
    active: bool = True

    def __str__(self) -> str:
        target = "container" if self.to_item is None else f"slot[{self.to_item}]"
        text = f"slot[{self.item}].{self.attribute.value} {self.relation.value} {target}.{self.to_attribute.value}"
        if self.constant:
            text += f" + {self.constant:g}"
        return text


def _pin_vertical(index: int) -> list[Constraint]:
    return [
        Constraint(index, Attribute.TOP, Relation.EQUAL, None, Attribute.TOP),
        Constraint(index, Attribute.BOTTOM, Relation.EQUAL, None, Attribute.BOTTOM),
    ]


def build_row_constraints(slot_count: int, spacing: float) -> list[Constraint]:
    """Build the constraints that lay slots out left to right.

    - first slot: leading >= container leading
    - every later slot: leading == previous trailing + ``spacing``
    - last slot: trailing <= container trailing
    - every slot: top and bottom pinned to the container

    A single slot gets both edge anchors and no spacing rule. Zero slots give
    an empty list.
    """
    constraints: list[Constraint] = []
    last = slot_count - 1
    for index in range(slot_count):
        if index == 0:
            constraints.append(
                Constraint(index, Attribute.LEADING, Relation.GREATER_OR_EQUAL, None, Attribute.LEADING)
            )
        else:
            constraints.append(
                Constraint(index, Attribute.LEADING, Relation.EQUAL, index - 1, Attribute.TRAILING, spacing)
            )
        constraints.extend(_pin_vertical(index))
        if index == last:
            constraints.append(
                Constraint(index, Attribute.TRAILING, Relation.LESS_OR_EQUAL, None, Attribute.TRAILING)
            )
    return constraints


def deactivate(constraints: Sequence[Constraint]) -> None:
    for constraint in constraints:
        constraint.active = False


def natural_size(slot_size: Size, slot_count: int, spacing: float) -> Size:
    """Preferred size of a row of ``slot_count`` equal slots.

    ``width = slot_width * n + spacing * (n - 1)``; the height is the slot
    height. Zero slots give ``ZERO_SIZE``.
    """
    if slot_count <= 0:
        return ZERO_SIZE
    return Size(
        slot_size.width * slot_count + spacing * (slot_count - 1),
        slot_size.height,
    )


def resolve_frames(
    constraints: Sequence[Constraint],
    slot_sizes: Sequence[Size],
    container: Size,
) -> list[Rect]:
    """Resolve active row constraints into one frame per slot.

    Slots keep their natural width and take the container height (top and
    bottom pins). The row is centered in any horizontal slack between the
    leading ``>=`` and trailing ``<=`` anchors; when the row does not fit,
    the leading anchor wins and the row overflows to the right.

    Later slots without an active spacing constraint are placed at x = 0.
    """
    count = len(slot_sizes)
    if count == 0:
        return []

    leading_min = 0.0
    trailing_max: Optional[float] = None
    gaps = [0.0] * count
    chained = [False] * count
    top = [0.0] * count
    bottom = [container.height] * count

    for c in constraints:
        if not c.active or not 0 <= c.item < count:
            continue
        if c.attribute is Attribute.LEADING:
            if c.to_item is None:
                leading_min = max(leading_min, c.constant)
            else:
                gaps[c.item] = c.constant
                chained[c.item] = True
        elif c.attribute is Attribute.TRAILING and c.to_item is None:
            limit = container.width + c.constant
            trailing_max = limit if trailing_max is None else min(trailing_max, limit)
        elif c.attribute is Attribute.TOP and c.to_item is None:
            top[c.item] = c.constant
        elif c.attribute is Attribute.BOTTOM and c.to_item is None:
            bottom[c.item] = container.height + c.constant

    # Offsets of each slot relative to the first one
    offsets = [0.0] * count
    for index in range(1, count):
        if chained[index]:
            offsets[index] = offsets[index - 1] + slot_sizes[index - 1].width + gaps[index]
    row_width = offsets[-1] + slot_sizes[-1].width

    start = leading_min
    if trailing_max is not None:
        slack = trailing_max - leading_min - row_width
        if slack > 0:
            start = leading_min + slack / 2

    return [
        Rect(
            start + offsets[index] if (index == 0 or chained[index]) else 0.0,
            top[index],
            slot_sizes[index].width,
            max(0.0, bottom[index] - top[index]),
        )
        for index in range(count)
    ]
