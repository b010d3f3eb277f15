import pytest

from pixmorph.model import (
    BoundaryCondition,
    Connection,
    ControlPoint,
    Parameters,
    Side,
)


def test_defaults_match_project_defaults():
    params = Parameters()
    assert params.w_ssim == 100.0
    assert params.w_tps == 0.05
    assert params.w_ui == 100000.0
    assert params.max_iter == 1000
    assert params.start_res == 8
    assert params.bcond is BoundaryCondition.NONE
    assert params.active_l == (-1, -1)


def test_reset_restores_settings_and_clears_tracks():
    params = Parameters()
    params.w_ssim = 1.0
    params.eps = 5.0
    params.bcond = BoundaryCondition.BORDER
    params.lp.append([ControlPoint(1, 2, 0)])
    params.rp.append([ControlPoint(3, 4, 0)])
    params.set_active(Side.LEFT, (0, 0))
    params.reset()
    assert params.w_ssim == 100.0
    assert params.eps == 0.01
    assert params.bcond is BoundaryCondition.NONE
    assert params.lp == []
    assert params.rp == []
    assert params.active(Side.LEFT) == (-1, -1)


def test_reset_keeps_connections_and_frames():
    params = Parameters(frame0=3, frame1=4, total_frame=10)
    params.cnt.append([Connection((0, 0), (0, 0))])
    params.reset()
    assert len(params.cnt) == 1
    assert (params.frame0, params.frame1, params.total_frame) == (3, 4, 10)


def test_clear_points_removes_everything():
    params = Parameters()
    params.lp.append([ControlPoint(1, 2, 0)])
    params.cnt.append([Connection((0, 0), (0, 0))])
    params.set_active(Side.RIGHT, (0, 0))
    params.clear_points()
    assert params.lp == [] and params.cnt == []
    assert params.active(Side.RIGHT) == (-1, -1)


def test_tracks_returns_side_list():
    params = Parameters()
    assert params.tracks(Side.LEFT) is params.lp
    assert params.tracks(Side.RIGHT) is params.rp
    params.tracks("l").append([ControlPoint(0, 0, 0)])
    assert len(params.lp) == 1


def test_frame_per_side():
    params = Parameters(frame0=2, frame1=7)
    assert params.frame(Side.LEFT) == 2
    assert params.frame(Side.RIGHT) == 7


def test_set_active_is_per_side():
    params = Parameters()
    params.set_active(Side.RIGHT, (2, 5))
    assert params.active(Side.RIGHT) == (2, 5)
    assert params.active(Side.LEFT) == (-1, -1)


def test_unknown_side_rejected():
    params = Parameters()
    with pytest.raises(ValueError):
        params.frame("m")


def test_control_point_defaults_to_anchor():
    point = ControlPoint(4, 5, 6)
    assert (point.w, point.weight) == (1, 1.0)