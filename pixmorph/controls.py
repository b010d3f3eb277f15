"""Playback control bar and the frame stepping of the morph preview."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

RANGE_MIN = 0
RANGE_MAX = 50
# Frame that the range slider and the stop button are centred on.
CENTER_FRAME = 50

PLAY_INTERVAL_MS = 1000
RECORD_INTERVAL_MS = 200

CONTROL_NAMES = ("record", "play", "pause", "stop", "range")


class Status(Enum):
    """State of the control bar."""

    IDLE = -1
    RECORD = 0
    PLAY = 1
    PAUSE = 2
    STOP = 3


_ENABLED: dict[Status, frozenset[str]] = {
    Status.IDLE: frozenset(),
    Status.RECORD: frozenset(),
    Status.PLAY: frozenset({"record", "pause", "stop", "range"}),
    Status.PAUSE: frozenset({"record", "play", "stop", "range"}),
    Status.STOP: frozenset({"record", "play", "range"}),
}


def smoothstep(t: float, a: float, b: float) -> float:
    """Cubic Hermite ease between ``a`` and ``b``, clamped to [0, 1]."""
    if t < a:
        return 0.0
    if t > b:
        return 1.0
    t = (t - a) / (b - a)
    return t * t * (3 - 2 * t)


@dataclass
class ControlBar:
    """Record/play/pause/stop buttons plus a range slider.

    Listeners receive the new status (as an int) or the new range.
    """

    status: Status = Status.IDLE
    range: int = RANGE_MAX
    status_listeners: list[Callable[[int], None]] = field(default_factory=list)
    range_listeners: list[Callable[[int], None]] = field(default_factory=list)

    def _change_status(self, status: Status) -> None:
        self.status = status
        for listener in self.status_listeners:
            listener(status.value)

    def play(self) -> None:
        """Start or resume playback."""
        self._change_status(Status.PLAY)

    def record(self) -> None:
        """Start recording the preview to frames."""
        self._change_status(Status.RECORD)

    def pause(self) -> None:
        """Pause playback."""
        self._change_status(Status.PAUSE)

    def stop(self) -> None:
        """Stop playback."""
        self._change_status(Status.STOP)

    def record_finished(self) -> None:
        """Return to playing once a recording completes, without notifying."""
        self.status = Status.PLAY

    def set_range(self, value: int) -> None:
        """Move the range slider; the value is clamped to the slider bounds."""
        self.range = max(RANGE_MIN, min(RANGE_MAX, int(value)))
        for listener in self.range_listeners:
            listener(self.range)

    def enabled_controls(self) -> frozenset[str]:
        """Names of the controls usable in the current status."""
        return _ENABLED[self.status]


@dataclass
class Playback:
    """Ping-pong stepping through the morph frames, with optional recording."""

    frame: int = 0
    min_frame: int = 0
    max_frame: int = 0
    color_from: int = 1
    forward: bool = True
    saving: bool = False
    running: bool = True
    interval_ms: int = PLAY_INTERVAL_MS
    recorded: list[int] = field(default_factory=list)
    record_finished_listeners: list[Callable[[], None]] = field(default_factory=list)

    def configure(self, total_frames: int) -> None:
        """Fit the playback range to a video of ``total_frames`` frames."""
        self.min_frame = 0
        self.max_frame = int(total_frames) - 1
        if self.frame > self.max_frame - 1:
            self.frame = self.max_frame - 1
            self.forward = False

    def _start(self, interval_ms: int) -> None:
        self.running = True
        self.interval_ms = interval_ms

    def status_change(self, status) -> None:
        """React to a control bar status (a ``Status`` or its int value)."""
        status = Status(status)
        if status is Status.RECORD:
            self.running = False
            self.frame = self.min_frame
            self.saving = True
            self.forward = True
            self.recorded.clear()
            self._start(RECORD_INTERVAL_MS)
        elif status is Status.PLAY:
            self._start(PLAY_INTERVAL_MS)
        elif status is Status.PAUSE:
            self.running = False
        elif status is Status.STOP:
            self.running = False
            self.frame = CENTER_FRAME

    def range_change(self, range_: int) -> None:
        """Play ``range_`` frames either side of the centre frame."""
        self.running = False
        self.min_frame = CENTER_FRAME - range_
        self.max_frame = CENTER_FRAME + range_
        self.frame = self.min_frame
        self._start(PLAY_INTERVAL_MS)

    def blend_factor(self) -> float:
        """Eased morph factor of the current frame within the range."""
        span = self.max_frame - self.min_frame
        if span == 0:
            raise ValueError("playback range is empty")
        return smoothstep((self.frame - self.min_frame) / span, 0.0, 1.0)

    def step(self) -> int:
        """Show the current frame, then advance; returns the frame shown."""
        shown = self.frame
        if self.saving:
            self.recorded.append(shown)
            if shown >= self.max_frame:
                self.saving = False
                for listener in self.record_finished_listeners:
                    listener()
        if self.forward:
            self.frame += 1
            if self.frame >= self.max_frame:
                self.forward = False
        else:
            self.frame -= 1
            if self.frame <= self.min_frame:
                self.forward = True
        return shown