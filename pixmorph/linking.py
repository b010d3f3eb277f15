"""Pairing control points across the two videos and linking them."""

from __future__ import annotations

from .model import Connection, ControlPoint, Parameters

ADDED = "added"
REMOVED = "removed"
UNCHANGED = "unchanged"


def add_halfway_pair(
    parameters: Parameters, start: tuple[int, int], end: tuple[int, int]
) -> tuple[tuple[int, int], tuple[int, int]]:
    """Start a left track at ``start`` and a right track at ``end``.

    Both positions are image pixels.  The left point lies on ``frame0`` and
    the right one on ``frame1``.  Both new tracks become the active
    selection, and the two selections are returned.
    """
    lx, ly = start
    rx, ry = end
    parameters.lp.append([ControlPoint(int(lx), int(ly), parameters.frame0, 1, 1.0)])
    parameters.active_l = (len(parameters.lp) - 1, 0)
    parameters.rp.append([ControlPoint(int(rx), int(ry), parameters.frame1, 1, 1.0)])
    parameters.active_r = (len(parameters.rp) - 1, 0)
    return parameters.active_l, parameters.active_r


def _find_link(parameters: Parameters) -> tuple[int, int, bool] | None:
    """First link touching either selection: ``(group, link, exact match)``."""
    left = tuple(parameters.active_l)
    right = tuple(parameters.active_r)
    for k, group in enumerate(parameters.cnt):
        for l, link in enumerate(group):
            same_left = tuple(link.left) == left
            same_right = tuple(link.right) == right
            if same_left or same_right:
                return k, l, same_left and same_right
    return None


def connect_points(parameters: Parameters, matched: bool, total_frames: int) -> str | None:
    """Toggle the connection between the selected left and right points.

    Without a full selection on both sides nothing happens and ``None`` is
    returned.  If neither point is linked yet, a link is added: a single one
    before the matching stage, or one per frame of the two tracks once
    ``matched``.  If exactly this pair is linked, the link is removed (the
    whole group once ``matched``).  A pair where only one side is already
    linked elsewhere is left unchanged.
    """
    left = parameters.active_l
    right = parameters.active_r
    if left[0] < 0 or left[1] < 0 or right[0] < 0 or right[1] < 0:
        return None

    found = _find_link(parameters)
    if found is None:
        if matched:
            group = [
                Connection((left[0], frame), (right[0], frame))
                for frame in range(int(total_frames))
            ]
        else:
            group = [Connection(tuple(left), tuple(right))]
        parameters.cnt.append(group)
        return ADDED

    k, l, exact = found
    if not exact:
        return UNCHANGED
    if matched:
        del parameters.cnt[k]
    else:
        del parameters.cnt[k][l]
        if not parameters.cnt[k]:
            del parameters.cnt[k]
    return REMOVED