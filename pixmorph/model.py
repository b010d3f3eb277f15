"""Shared editing state: control points, their connections and solver settings."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

NO_SELECTION: tuple[int, int] = (-1, -1)


class BoundaryCondition(Enum):
    """How the image border is constrained during optimisation."""

    NONE = 0
    CORNER = 1
    BORDER = 2


class Side(Enum):
    """Which of the two input videos an edit refers to."""

    LEFT = "l"
    RIGHT = "r"


@dataclass
class ControlPoint:
    """A point of a track: pixel position, frame index, anchor flag and weight.

    ``w`` is 1 for points placed by the user (anchors) and 0 for points
    propagated along the optical flow.
    """

    x: int
    y: int
    z: int
    w: int = 1
    weight: float = 1.0


@dataclass
class Connection:
    """Links a point of a left track to a point of a right track.

    Each side is a ``(track, frame)`` index pair.
    """

    left: tuple[int, int]
    right: tuple[int, int]


def _default_tracks() -> list[list[ControlPoint]]:
    return []


@dataclass
class Parameters:
    """Control points, connections and optimisation settings of a project."""

    lp: list[list[ControlPoint]] = field(default_factory=_default_tracks)
    rp: list[list[ControlPoint]] = field(default_factory=_default_tracks)
    cnt: list[list[Connection]] = field(default_factory=list)
    active_l: tuple[int, int] = NO_SELECTION
    active_r: tuple[int, int] = NO_SELECTION
    w_ssim: float = 100.0
    ssim_clamp: float = 0.0
    w_tps: float = 0.05
    w_ui: float = 100000.0
    w_temp: float = 10.0
    max_iter: int = 1000
    max_iter_drop_factor: float = 2.0
    eps: float = 0.01
    start_res: int = 8
    bcond: BoundaryCondition = BoundaryCondition.NONE
    frame0: int = 0
    frame1: int = 0
    total_frame: int = 0

    def reset(self) -> None:
        """Drop all tracks and selections and restore the default settings.

        Connections, frame positions and the frame count are left untouched.
        """
        self.lp.clear()
        self.rp.clear()
        self.active_l = NO_SELECTION
        self.active_r = NO_SELECTION
        self.w_ssim = 100.0
        self.ssim_clamp = 0.0
        self.w_tps = 0.05
        self.w_ui = 100000.0
        self.w_temp = 10.0
        self.max_iter = 1000
        self.max_iter_drop_factor = 2.0
        self.eps = 0.01
        self.start_res = 8
        self.bcond = BoundaryCondition.NONE

    def clear_points(self) -> None:
        """Remove all tracks and connections and clear both selections."""
        self.cnt.clear()
        self.lp.clear()
        self.rp.clear()
        self.active_l = NO_SELECTION
        self.active_r = NO_SELECTION

    def tracks(self, side: Side) -> list[list[ControlPoint]]:
        """The track list belonging to ``side``."""
        return self.lp if Side(side) is Side.LEFT else self.rp

    def frame(self, side: Side) -> int:
        """The frame currently shown for ``side``."""
        return self.frame0 if Side(side) is Side.LEFT else self.frame1

    def active(self, side: Side) -> tuple[int, int]:
        """The selected ``(track, frame)`` pair of ``side``."""
        return self.active_l if Side(side) is Side.LEFT else self.active_r

    def set_active(self, side: Side, index: tuple[int, int]) -> None:
        """Select the ``(track, frame)`` pair ``index`` on ``side``."""
        track, frame = index
        if Side(side) is Side.LEFT:
            self.active_l = (int(track), int(frame))
        else:
            self.active_r = (int(track), int(frame))