"""Reference causal and anticausal recursive filters on rows and columns.

A filter of order ``R`` is given by ``R + 1`` weights ``w``.  The causal pass
computes ``y[j] = w[0]*x[j] - sum(w[k]*y[j-k] for k in 1..R)``; the
anticausal pass does the same from the end of the sequence backwards.
"""

from __future__ import annotations

from enum import Enum

import numpy as np


class BorderType(Enum):
    """How samples outside an image are extended."""

    CLAMP_TO_ZERO = 0
    CLAMP_TO_EDGE = 1
    REPEAT = 2
    REFLECT = 3


def _weights(weights) -> np.ndarray:
    w = np.asarray(weights, dtype=float).ravel()
    if w.size < 2:
        raise ValueError("a recursive filter needs at least two weights")
    return w


def _as_block(block) -> np.ndarray:
    data = np.asarray(block, dtype=float)
    if data.ndim != 2:
        raise ValueError("expected a two-dimensional block")
    return data


def _border(border, rows: int, order: int, name: str) -> np.ndarray:
    data = np.asarray(border, dtype=float)
    if data.shape != (rows, order):
        raise ValueError(f"{name} must have shape {(rows, order)}, got {data.shape}")
    return data


def _forward_core(prologue: np.ndarray, block: np.ndarray, w: np.ndarray) -> np.ndarray:
    order = w.size - 1
    # history[:, -1] is the most recent output
    history = prologue.copy()
    out = np.empty_like(block)
    for j in range(block.shape[1]):
        acc = w[0] * block[:, j]
        for k in range(1, order + 1):
            acc = acc - history[:, order - k] * w[k]
        history = np.concatenate([history[:, 1:], acc[:, None]], axis=1)
        out[:, j] = acc
    return out


def _reverse_core(block: np.ndarray, epilogue: np.ndarray, w: np.ndarray) -> np.ndarray:
    order = w.size - 1
    # history[:, 0] is the most recent output
    history = epilogue.copy()
    out = np.empty_like(block)
    for j in reversed(range(block.shape[1])):
        acc = w[0] * block[:, j]
        for k in range(1, order + 1):
            acc = acc - history[:, k - 1] * w[k]
        history = np.concatenate([acc[:, None], history[:, :-1]], axis=1)
        out[:, j] = acc
    return out


def forward(prologue, values, weights) -> np.ndarray:
    """Causal filter of a sequence; ``prologue[-1]`` is the latest prior output."""
    w = _weights(weights)
    data = np.asarray(values, dtype=float).ravel()
    prior = _border(np.asarray(prologue, dtype=float).reshape(1, -1), 1, w.size - 1, "prologue")
    return _forward_core(prior, data[None, :], w)[0]


def reverse(values, epilogue, weights) -> np.ndarray:
    """Anticausal filter of a sequence; ``epilogue[0]`` is the nearest following output."""
    w = _weights(weights)
    data = np.asarray(values, dtype=float).ravel()
    after = _border(np.asarray(epilogue, dtype=float).reshape(1, -1), 1, w.size - 1, "epilogue")
    return _reverse_core(data[None, :], after, w)[0]


def forward_rows(prologue, block, weights) -> np.ndarray:
    """Causal filter along each row; ``prologue`` has one row of ``R`` values per row."""
    w = _weights(weights)
    data = _as_block(block)
    prior = _border(prologue, data.shape[0], w.size - 1, "prologue")
    return _forward_core(prior, data, w)


def reverse_rows(block, epilogue, weights) -> np.ndarray:
    """Anticausal filter along each row; ``epilogue`` has ``R`` values per row."""
    w = _weights(weights)
    data = _as_block(block)
    after = _border(epilogue, data.shape[0], w.size - 1, "epilogue")
    return _reverse_core(data, after, w)


def forward_columns(prologue, block, weights) -> np.ndarray:
    """Causal filter down each column; ``prologue`` is ``R`` rows above the block."""
    data = _as_block(block)
    prior = np.asarray(prologue, dtype=float)
    return forward_rows(prior.T, data.T, weights).T


def reverse_columns(block, epilogue, weights) -> np.ndarray:
    """Anticausal filter up each column; ``epilogue`` is ``R`` rows below the block."""
    data = _as_block(block)
    after = np.asarray(epilogue, dtype=float)
    return reverse_rows(data.T, after.T, weights).T


def head(block, r: int) -> np.ndarray:
    """The first ``r`` columns of ``block``."""
    data = _as_block(block)
    if not 0 <= r <= data.shape[1]:
        raise ValueError(f"cannot take {r} columns from {data.shape[1]}")
    return data[:, :r].copy()


def tail(block, r: int) -> np.ndarray:
    """The last ``r`` columns of ``block``."""
    data = _as_block(block)
    if not 0 <= r <= data.shape[1]:
        raise ValueError(f"cannot take {r} columns from {data.shape[1]}")
    return data[:, data.shape[1] - r:].copy()


def head_rows(block, r: int) -> np.ndarray:
    """The first ``r`` rows of ``block``."""
    return head(_as_block(block).T, r).T


def tail_rows(block, r: int) -> np.ndarray:
    """The last ``r`` rows of ``block``."""
    return tail(_as_block(block).T, r).T