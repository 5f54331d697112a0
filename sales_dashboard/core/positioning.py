# sales_dashboard/core/positioning.py
"""Screen offsets for the draggable stats box.

The box follows the pointer while the button is held: every move event puts
the centre of the box under the pointer. The browser side only forwards
pointer coordinates; the arithmetic lives here.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, Literal


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class BoxOffset:
    left: float
    top: float


@dataclass(frozen=True)
class PointerEvent:
    kind: Literal["down", "move", "up"]
    x: float
    y: float


@dataclass(frozen=True)
class DragState:
    active: bool = False
    offset: BoxOffset | None = None


def centered_offset(pointer: Point, width: float, height: float) -> BoxOffset:
    return BoxOffset(left=pointer.x - width / 2, top=pointer.y - height / 2)


def clamp_offset(
    offset: BoxOffset,
    width: float,
    height: float,
    viewport_width: float,
    viewport_height: float,
) -> BoxOffset:
    """Keep the whole box inside the viewport (top-left wins when it can't fit)."""
    left = min(offset.left, viewport_width - width)
    top = min(offset.top, viewport_height - height)
    return BoxOffset(left=max(0.0, left), top=max(0.0, top))


def apply_pointer_event(
    state: DragState, event: PointerEvent, width: float, height: float
) -> DragState:
    if event.kind == "down":
        return replace(state, active=True)
    if event.kind == "up":
        return replace(state, active=False)
    if event.kind == "move":
        if not state.active:
            return state
        return replace(state, offset=centered_offset(Point(event.x, event.y), width, height))
    raise ValueError(f"Unsupported pointer event '{event.kind}'.")


def replay_drag(
    events: Iterable[PointerEvent],
    width: float,
    height: float,
    start: BoxOffset | None = None,
) -> DragState:
    state = DragState(offset=start)
    for event in events:
        state = apply_pointer_event(state, event, width, height)
    return state
