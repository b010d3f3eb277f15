"""Mouse editing of control points on one of the two input videos."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from .model import NO_SELECTION, ControlPoint, Parameters, Side

# Maximum distance in pixels, per axis, at which a click picks an existing point.
PICK_RADIUS = 3

ACTION_NONE = "n"
ACTION_MOVE = "m"
ACTION_ADD = "a"
ACTION_DELETE = "d"
ACTION_CONNECT = "c"


class Button(Enum):
    """Mouse buttons the editor reacts to."""

    LEFT = "left"
    RIGHT = "right"
    MIDDLE = "middle"


def to_image_coords(x: float, y: float, view_size, image_size) -> tuple[int, int]:
    """Map a position in the displayed view to a pixel of the image."""
    view_w, view_h = view_size
    image_w, image_h = image_size
    if view_w <= 0 or view_h <= 0:
        raise ValueError("view size must be positive")
    return (
        int((x + 0.5) / view_w * image_w),
        int((y + 0.5) / view_h * image_h),
    )


@dataclass
class PointEditor:
    """Adds, selects, moves and deletes control points of one video side.

    Listeners:
      ``update_listeners`` are called with no arguments after every change
      that needs a redraw; ``modified_listeners`` receive
      ``(side_name, action, True)`` on release; ``frame_listeners`` receive
      the side name when a selection moved the other side's frame.
    """

    side: Side
    parameters: Parameters
    image_size: tuple[int, int] = (512, 512)
    view_size: tuple[int, int] | None = None
    image_loaded: bool = False
    action: str = ACTION_NONE
    update_listeners: list[Callable[[], None]] = field(default_factory=list)
    modified_listeners: list[Callable[[str, str, bool], None]] = field(default_factory=list)
    frame_listeners: list[Callable[[str], None]] = field(default_factory=list)
    _left_down: bool = field(default=False, init=False, repr=False)

    def __post_init__(self) -> None:
        self.side = Side(self.side)
        if self.view_size is None:
            self.view_size = tuple(self.image_size)

    def _notify_update(self) -> None:
        for listener in self.update_listeners:
            listener()

    def _find(self, tracks: list[list[ControlPoint]], frame: int, x: int, y: int) -> int | None:
        for i, track in enumerate(tracks):
            if not track or frame >= len(track) or frame < 0:
                continue
            point = track[frame]
            if (
                abs(point.x - x) <= PICK_RADIUS
                and abs(point.y - y) <= PICK_RADIUS
                and abs(point.z - frame) < 1
            ):
                return i
        return None

    def _follow_connections(self, index: tuple[int, int]) -> None:
        params = self.parameters
        for group in params.cnt:
            for link in group:
                if self.side is Side.LEFT and tuple(link.left) == index:
                    params.active_r = tuple(link.right)
                    params.frame1 = link.right[1]
                    for listener in self.frame_listeners:
                        listener(Side.LEFT.value)
                    break
                if self.side is Side.RIGHT and tuple(link.right) == index:
                    params.active_l = tuple(link.left)
                    params.frame0 = link.left[1]
                    for listener in self.frame_listeners:
                        listener(Side.RIGHT.value)
                    break

    def _select_or_add(self, x: int, y: int) -> None:
        params = self.parameters
        tracks = params.tracks(self.side)
        frame = params.frame(self.side)
        found = self._find(tracks, frame, x, y)
        if found is not None:
            params.set_active(self.side, (found, frame))
            self.action = ACTION_MOVE
            self._follow_connections((found, frame))
            return
        tracks.append([ControlPoint(x, y, frame, 1, 1.0)])
        params.set_active(self.side, (len(tracks) - 1, 0))
        self.action = ACTION_ADD

    def _delete(self, x: int, y: int) -> None:
        params = self.parameters
        tracks = params.tracks(self.side)
        frame = params.frame(self.side)
        found = self._find(tracks, frame, x, y)
        if found is None:
            return
        for k, group in enumerate(params.cnt):
            if not group:
                continue
            link = group[0]
            own = link.left if self.side is Side.LEFT else link.right
            if own[0] == found:
                del params.cnt[k]
                break
        tracks[found].clear()
        params.set_active(self.side, NO_SELECTION)
        self.action = ACTION_DELETE

    def press(self, x: int, y: int, button: Button) -> None:
        """Handle a mouse press at view position ``(x, y)``."""
        if not self.image_loaded:
            return
        button = Button(button)
        self._left_down = button is Button.LEFT
        self.action = ACTION_NONE
        view_w, view_h = self.view_size
        if x > view_w - 1 or y >= view_h - 1:
            return
        ix, iy = to_image_coords(x, y, self.view_size, self.image_size)
        if button is Button.LEFT:
            self._select_or_add(ix, iy)
        elif button is Button.RIGHT:
            self._delete(ix, iy)
        elif button is Button.MIDDLE:
            self.action = ACTION_CONNECT
        self._notify_update()

    def drag(self, x: int, y: int) -> None:
        """Move the selected point to ``(x, y)`` while the left button is held."""
        if not self.image_loaded:
            return
        if self._left_down:
            params = self.parameters
            track, index = params.active(self.side)
            if track < 0 or index < 0:
                return
            view_w, view_h = self.view_size
            cx = max(min(int(x), view_w - 1), 0)
            cy = max(min(int(y), view_h - 1), 0)
            ix, iy = to_image_coords(cx, cy, self.view_size, self.image_size)
            frame = params.frame(self.side)
            params.tracks(self.side)[track][index] = ControlPoint(ix, iy, frame, 1, 1.0)
        self._notify_update()

    def release(self) -> str | None:
        """Finish the gesture and report the action taken; ``None`` if no image."""
        self._left_down = False
        if not self.image_loaded:
            return None
        for listener in self.modified_listeners:
            listener(self.side.value, self.action, True)
        return self.action