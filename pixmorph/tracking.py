"""Propagating control points through a video along its optical flow."""

from __future__ import annotations

from dataclasses import replace

import numpy as np

from .model import ControlPoint

# Half size of the square patch compared by the sum of squared differences.
SSD_RADIUS = 2
# Half size of the square patch whose colour histograms are compared.
HISTOGRAM_RADIUS = 3
HISTOGRAM_BINS = 10
# Upper bound of the histogram range; like the lower bound, it is exclusive above.
HISTOGRAM_RANGE = 255


def _frame_size(video) -> tuple[int, int]:
    if len(video) == 0:
        raise ValueError("video has no frames")
    rows, cols = np.asarray(video[0]).shape[:2]
    return int(cols), int(rows)


def clamp_to_frame(x: int, y: int, cols: int, rows: int) -> tuple[int, int]:
    """Clamp the pixel ``(x, y)`` into a frame of ``cols`` by ``rows`` pixels."""
    return min(max(0, int(x)), cols - 1), min(max(0, int(y)), rows - 1)


def patch_ssd(p1: ControlPoint, p2: ControlPoint, video) -> float:
    """Sum of squared colour differences of the 5x5 patches around two points.

    Each point is looked up in the frame given by its ``z``; samples outside
    the frame are clamped to its edge.
    """
    cols, rows = _frame_size(video)
    offsets = range(-SSD_RADIUS, SSD_RADIUS + 1)
    frame1 = np.asarray(video[p1.z])
    frame2 = np.asarray(video[p2.z])
    total = 0.0
    for dy in offsets:
        for dx in offsets:
            x1, y1 = clamp_to_frame(p1.x + dx, p1.y + dy, cols, rows)
            x2, y2 = clamp_to_frame(p2.x + dx, p2.y + dy, cols, rows)
            diff = frame1[y1, x1, :3].astype(float) - frame2[y2, x2, :3].astype(float)
            total += float(np.dot(diff, diff))
    return total


def _patch(point: ControlPoint, video, cols: int, rows: int) -> np.ndarray:
    lx, ly = clamp_to_frame(point.x - HISTOGRAM_RADIUS, point.y - HISTOGRAM_RADIUS, cols, rows)
    rx, ry = clamp_to_frame(point.x + HISTOGRAM_RADIUS, point.y + HISTOGRAM_RADIUS, cols, rows)
    return np.asarray(video[point.z])[ly:ry, lx:rx, :3]


def _histogram(patch: np.ndarray) -> np.ndarray:
    pixels = patch.reshape(-1, 3).astype(np.int64)
    bins = pixels * HISTOGRAM_BINS // HISTOGRAM_RANGE
    keep = np.all(bins < HISTOGRAM_BINS, axis=1)
    hist = np.zeros((HISTOGRAM_BINS,) * 3, dtype=float)
    for r, g, b in bins[keep]:
        hist[r, g, b] += 1.0
    return hist.ravel()


def histogram_similarity(p1: ControlPoint, p2: ControlPoint, video) -> float:
    """Absolute correlation of the colour histograms around two points.

    Histograms have 10 bins per channel.  When either histogram is constant
    the correlation is taken as 1.
    """
    cols, rows = _frame_size(video)
    h1 = _histogram(_patch(p1, video, cols, rows))
    h2 = _histogram(_patch(p2, video, cols, rows))
    d1 = h1 - h1.mean()
    d2 = h2 - h2.mean()
    numerator = float(np.dot(d1, d2))
    denominator = float(np.dot(d1, d1) * np.dot(d2, d2))
    if abs(denominator) > np.finfo(float).eps:
        return abs(numerator / np.sqrt(denominator))
    return 1.0


def _advance(point: ControlPoint, flow, cols: int, rows: int, step: int) -> ControlPoint:
    """``point`` moved by the flow at its pixel into the neighbouring frame."""
    x, y = clamp_to_frame(point.x, point.y, cols, rows)
    vector = np.asarray(flow)[y, x]
    return replace(
        point,
        x=int(point.x + float(vector[0]) + 0.5),
        y=int(point.y + float(vector[1]) + 0.5),
        z=point.z + step,
    )


def add_track(tracks, active, video, forward_flow, backward_flow, total_frames):
    """Extend the selected single point into a track over the whole video.

    The point is followed backwards to frame 0 and forwards to the last
    frame; the new points are not anchors and are weighted by how much
    their surroundings resemble the original point's.  Returns the new
    selection, which points at the original point inside its track.
    """
    cols, rows = _frame_size(video)
    index, position = active
    track = tracks[index]
    origin = track[position]

    point = replace(origin, w=0)
    for t in range(origin.z, 0, -1):
        point = _advance(point, backward_flow[t], cols, rows, -1)
        point.weight = histogram_similarity(point, origin, video)
        track.insert(0, replace(point))

    point = replace(origin, w=0)
    for t in range(origin.z, int(total_frames) - 1):
        point = _advance(point, forward_flow[t], cols, rows, 1)
        point.weight = histogram_similarity(point, origin, video)
        track.append(replace(point))

    return index, origin.z


def move_track(tracks, active, video, forward_flow, backward_flow):
    """Re-propagate a track after its selected anchor was moved.

    Points between the moved anchor and its neighbouring anchors are
    recomputed along the flow and blended with the propagation from the
    neighbouring anchor.  Returns the updated track.
    """
    cols, rows = _frame_size(video)
    index, mid = active
    track = tracks[index]
    size = len(track)

    begin = next((j for j in range(mid - 1, -1, -1) if track[j].w), -1)

    point = replace(track[mid], w=0)
    for t in range(mid, begin + 1, -1):
        point = _advance(point, backward_flow[t], cols, rows, -1)
        point.weight = histogram_similarity(point, track[mid], video)
        track[t - 1] = replace(point)

    if begin >= 0:
        point = replace(track[begin], w=0)
        for t in range(begin, mid - 1):
            fa = ((t + 1) - begin) / (mid - begin)
            point = _advance(point, forward_flow[t], cols, rows, 1)
            target = track[t + 1]
            target.x = int(target.x * fa + point.x * (1 - fa))
            target.y = int(target.y * fa + point.y * (1 - fa))
            target.weight = (
                histogram_similarity(target, track[mid], video) * fa
                + histogram_similarity(target, track[begin], video) * (1 - fa)
            )

    end = next((j for j in range(mid + 1, size) if track[j].w), size)

    point = replace(track[mid], w=0)
    for t in range(mid, end - 1):
        point = _advance(point, forward_flow[t], cols, rows, 1)
        point.weight = histogram_similarity(point, track[mid], video)
        track[t + 1] = replace(point)

    if end < size:
        point = replace(track[end], w=0)
        for t in range(end, mid + 1, -1):
            fa = (end - (t - 1)) / (end - mid)
            point = _advance(point, backward_flow[t], cols, rows, -1)
            target = track[t - 1]
            target.x = int(target.x * fa + point.x * (1 - fa))
            target.y = int(target.y * fa + point.y * (1 - fa))
            target.weight = (
                histogram_similarity(target, track[mid], video) * fa
                + histogram_similarity(target, track[end], video) * (1 - fa)
            )

    return track