import pytest

from pixmorph.linking import ADDED, REMOVED, UNCHANGED, add_halfway_pair, connect_points
from pixmorph.model import Connection, ControlPoint, Parameters


@pytest.fixture
def params():
    p = Parameters()
    p.frame0 = 4
    p.frame1 = 6
    return p


def test_add_halfway_pair_creates_tracks(params):
    active = add_halfway_pair(params, (10, 20), (30, 40))
    assert params.lp == [[ControlPoint(10, 20, 4, 1, 1.0)]]
    assert params.rp == [[ControlPoint(30, 40, 6, 1, 1.0)]]
    assert active == ((0, 0), (0, 0))
    assert params.active_l == (0, 0)
    assert params.active_r == (0, 0)


def test_add_halfway_pair_selects_newest(params):
    add_halfway_pair(params, (1, 1), (2, 2))
    add_halfway_pair(params, (3, 3), (4, 4))
    assert params.active_l == (1, 0)
    assert params.active_r == (1, 0)
    assert params.lp[1][0].x == 3
    assert params.rp[1][0].y == 4


def test_connect_without_selection_does_nothing(params):
    assert connect_points(params, False, 10) is None
    assert params.cnt == []


def test_connect_unmatched_adds_single_link(params):
    params.active_l = (0, 4)
    params.active_r = (1, 6)
    assert connect_points(params, False, 10) == ADDED
    assert params.cnt == [[Connection((0, 4), (1, 6))]]


def test_connect_twice_removes_link(params):
    params.active_l = (0, 4)
    params.active_r = (1, 6)
    connect_points(params, False, 10)
    assert connect_points(params, False, 10) == REMOVED
    assert params.cnt == []


def test_connect_matched_links_every_frame(params):
    params.active_l = (2, 3)
    params.active_r = (5, 3)
    assert connect_points(params, True, 7) == ADDED
    assert len(params.cnt) == 1
    group = params.cnt[0]
    assert len(group) == 7
    assert all(link.left == (2, f) and link.right == (5, f) for f, link in enumerate(group))


def test_connect_matched_removes_whole_group(params):
    params.active_l = (0, 2)
    params.active_r = (0, 2)
    connect_points(params, True, 5)
    assert connect_points(params, True, 5) == REMOVED
    assert params.cnt == []


def test_partial_overlap_is_unchanged(params):
    params.active_l = (0, 4)
    params.active_r = (1, 6)
    connect_points(params, False, 10)
    params.active_r = (2, 6)
    assert connect_points(params, False, 10) == UNCHANGED
    assert params.cnt == [[Connection((0, 4), (1, 6))]]


def test_unmatched_remove_keeps_other_links_in_group(params):
    params.cnt = [[Connection((0, 1), (0, 1)), Connection((0, 4), (1, 6))]]
    params.active_l = (0, 4)
    params.active_r = (1, 6)
    assert connect_points(params, False, 10) == REMOVED
    assert params.cnt == [[Connection((0, 1), (0, 1))]]