import pytest

from pixmorph.controls import ControlBar, Playback, Status, smoothstep


def test_smoothstep_endpoints_and_midpoint():
    assert smoothstep(0.0, 0.0, 1.0) == 0.0
    assert smoothstep(1.0, 0.0, 1.0) == 1.0
    assert smoothstep(0.5, 0.0, 1.0) == pytest.approx(0.5)


def test_smoothstep_clamps_outside_interval():
    assert smoothstep(-3.0, 0.0, 1.0) == 0.0
    assert smoothstep(7.0, 0.0, 1.0) == 1.0


def test_smoothstep_is_monotonic():
    values = [smoothstep(i / 20, 0.0, 1.0) for i in range(21)]
    assert values == sorted(values)


def test_control_bar_initial_state():
    bar = ControlBar()
    assert bar.status is Status.IDLE
    assert bar.range == 50
    assert bar.enabled_controls() == frozenset()


def test_control_bar_buttons_notify_listeners():
    bar = ControlBar()
    seen = []
    bar.status_listeners.append(seen.append)
    bar.record()
    bar.play()
    bar.pause()
    bar.stop()
    assert seen == [0, 1, 2, 3]
    assert bar.status is Status.STOP


def test_enabled_controls_per_status():
    bar = ControlBar()
    bar.play()
    assert bar.enabled_controls() == {"record", "pause", "stop", "range"}
    bar.pause()
    assert bar.enabled_controls() == {"record", "play", "stop", "range"}
    bar.stop()
    assert bar.enabled_controls() == {"record", "play", "range"}
    bar.record()
    assert bar.enabled_controls() == frozenset()


def test_record_finished_returns_to_play_silently():
    bar = ControlBar()
    seen = []
    bar.record()
    bar.status_listeners.append(seen.append)
    bar.record_finished()
    assert bar.status is Status.PLAY
    assert seen == []


def test_set_range_clamps_and_notifies():
    bar = ControlBar()
    seen = []
    bar.range_listeners.append(seen.append)
    bar.set_range(20)
    bar.set_range(500)
    bar.set_range(-4)
    assert seen == [20, 50, 0]
    assert bar.range == 0


def test_range_change_centres_playback():
    playback = Playback()
    playback.range_change(10)
    assert (playback.min_frame, playback.max_frame) == (40, 60)
    assert playback.frame == 40
    assert playback.running
    assert playback.interval_ms == 1000


def test_configure_pulls_frame_back_into_range():
    playback = Playback(frame=20)
    playback.configure(10)
    assert playback.max_frame == 9
    assert playback.frame == 8
    assert playback.forward is False


def test_step_ping_pongs_within_range():
    playback = Playback()
    playback.configure(3)
    shown = [playback.step() for _ in range(6)]
    assert shown == [0, 1, 2, 1, 0, 1]


def test_step_stays_in_bounds_for_long_runs():
    playback = Playback()
    playback.range_change(5)
    shown = [playback.step() for _ in range(100)]
    assert min(shown) == playback.min_frame
    assert max(shown) == playback.max_frame


def test_recording_visits_each_frame_once_and_finishes():
    playback = Playback()
    playback.configure(4)
    finished = []
    playback.record_finished_listeners.append(lambda: finished.append(True))
    playback.status_change(Status.RECORD)
    assert playback.interval_ms == 200
    while playback.saving:
        playback.step()
    assert playback.recorded == list(range(playback.min_frame, playback.max_frame + 1))
    assert finished == [True]


def test_pause_and_stop():
    playback = Playback()
    playback.configure(100)
    playback.status_change(2)
    assert playback.running is False
    playback.status_change(Status.STOP)
    assert playback.frame == 50
    playback.status_change(Status.PLAY)
    assert playback.running
    assert playback.interval_ms == 1000


def test_unknown_status_rejected():
    with pytest.raises(ValueError):
        Playback().status_change(9)


def test_blend_factor_range_and_empty_range():
    playback = Playback()
    playback.configure(11)
    playback.frame = playback.min_frame
    assert playback.blend_factor() == 0.0
    playback.frame = playback.max_frame
    assert playback.blend_factor() == 1.0
    playback.frame = 5
    assert playback.blend_factor() == pytest.approx(0.5)
    empty = Playback()
    empty.configure(1)
    with pytest.raises(ValueError):
        empty.blend_factor()


def test_bar_and_playback_wired_together():
    bar = ControlBar()
    playback = Playback()
    playback.configure(3)
    bar.status_listeners.append(playback.status_change)
    bar.range_listeners.append(playback.range_change)
    playback.record_finished_listeners.append(bar.record_finished)
    bar.record()
    assert playback.saving
    while playback.saving:
        playback.step()
    assert bar.status is Status.PLAY
    bar.set_range(3)
    assert (playback.min_frame, playback.max_frame) == (47, 53)