"""
CPU backend for trajectory histogram rasterization
"""

import math
import warnings
import numpy as np
from numba import njit
from typing import Optional, Tuple, Iterator

# IEEE semantics: a blown-up orbit yields inf/nan instead of raising
jit_kernel = njit(cache=True, error_model="numpy")

CHUNK_SIZE = 1 << 18


@jit_kernel
def project_xy(c, xs):
    return xs[0], xs[1]


def make_orbit_kernel(step, project):
    """build a kernel running `step` over a chunk and storing projected points"""

    @njit(error_model="numpy")
    def orbit(c, xs, t, dt, out):
        for i in range(out.shape[0]):
            t = step(c, xs, t, dt)
            px, py = project(c, xs)
            out[i, 0] = px
            out[i, 1] = py
        return t

    return orbit


@jit_kernel
def round_half_away(v):
    # past 2**52 every float is integral, and floor would overflow int64
    if not abs(v) < 4503599627370496.0:
        return v
    if v < 0.0:
        return -float(math.floor(-v + 0.5))
    return float(math.floor(v + 0.5))


@jit_kernel
def scan_bounds_kernel(points, bounds):
    """running (top, left, bottom, right) over a chunk, nan points ignored"""
    top, left, bottom, right = bounds[0], bounds[1], bounds[2], bounds[3]
    for i in range(points.shape[0]):
        x = points[i, 0]
        y = points[i, 1]
        if math.isnan(x) or math.isnan(y):
            continue
        if y < top:
            top = y
        if x < left:
            left = x
        if y > bottom:
            bottom = y
        if x > right:
            right = x
    bounds[0] = top
    bounds[1] = left
    bounds[2] = bottom
    bounds[3] = right


@jit_kernel
def accumulate_kernel(points, hist, wc, hc, m, max_count):
    h = hist.shape[0]
    w = hist.shape[1]
    half_w = w // 2
    half_h = h // 2
    for i in range(points.shape[0]):
        x = points[i, 0]
        y = points[i, 1]
        if math.isnan(x) or math.isnan(y):
            continue
        col = round_half_away((x - wc) * m) + half_w
        row = round_half_away((y - hc) * m) + half_h
        # clamp before the cast so that +-inf lands on the border
        if not col >= 0.0:
            col = 0.0
        elif col > w - 1:
            col = w - 1.0
        if not row >= 0.0:
            row = 0.0
        elif row > h - 1:
            row = h - 1.0
        r = int(row)
        k = int(col)
        hist[r, k] += 1
        if hist[r, k] > max_count:
            max_count = hist[r, k]
    return max_count


class Viewport:
    """centre and uniform scale mapping phase space onto the pixel grid"""

    def __init__(self, wc: float, hc: float, m: float):
        self.wc = wc
        self.hc = hc
        self.m = m

    def __repr__(self) -> str:
        return f"Viewport(wc={self.wc:.4f}, hc={self.hc:.4f}, m={self.m:.4f})"


class CPUBackend:
    """shared rasterizer: edge search, accumulation into a 2D histogram"""

    def __init__(self, chunk_size: int = CHUNK_SIZE):
        self.chunk_size = chunk_size

    def trajectory(self, attractor, num_steps: int, skip: int = 0) -> Iterator[np.ndarray]:
        """rewind the attractor and yield its projected orbit chunk by chunk"""
        state = attractor.state
        state.set_init()
        dt = state.dt if state.dt is not None else 0.0
        coefs = attractor.coefs()
        buf = np.empty((max(1, min(num_steps, self.chunk_size)), 2), dtype=np.float64)

        done = 0
        while done < num_steps:
            k = min(num_steps - done, self.chunk_size)
            out = buf[:k]
            state.time = attractor.orbit(coefs, state.x, state.time, dt, out)
            if done + k > skip:
                yield out[max(0, skip - done):]
            done += k

    def search_edges(self, attractor, num_steps: int, skip: int) -> Tuple[float, float, float, float]:
        """bounding box (top, left, bottom, right) of a sample run; leaves the state rewound"""
        bounds = np.array([np.inf, np.inf, -np.inf, -np.inf], dtype=np.float64)
        for points in self.trajectory(attractor, num_steps, skip):
            scan_bounds_kernel(points, bounds)
        attractor.state.set_init()
        top, left, bottom, right = bounds
        return float(top), float(left), float(bottom), float(right)

    @staticmethod
    def viewport(edges: Tuple[float, float, float, float], width: int, height: int) -> Optional[Viewport]:
        """centre and scale for a bounding box; None when nothing can be placed"""
        top, left, bottom, right = edges
        if not all(math.isfinite(v) for v in edges):
            return None
        wc = (right + left) * 0.5
        hc = (bottom + top) * 0.5

        scales = []
        if right - left > 0.0:
            scales.append(width / (right - left))
        if bottom - top > 0.0:
            scales.append(height / (bottom - top))
        # a collapsed orbit has no extent to fit: draw it on the centre pixel
        m = min(scales) if scales else 1.0
        if not math.isfinite(m):
            m = 1.0
        return Viewport(wc, hc, m)

    def accumulate(self, attractor, num_steps: int, skip: int, viewport: Viewport,
                   width: int, height: int) -> Tuple[np.ndarray, int]:
        hist = np.zeros((height, width), dtype=np.int64)
        max_count = 0
        for points in self.trajectory(attractor, num_steps, skip):
            max_count = accumulate_kernel(points, hist, viewport.wc, viewport.hc, viewport.m, max_count)
        return hist, int(max_count)

    def histogram(self, attractor, num_steps: int, width: int, height: int) -> Tuple[np.ndarray, int]:
        """full pipeline: edge search, viewport, accumulation"""
        skip = attractor.skip
        edges = self.search_edges(attractor, attractor.edge_samples(num_steps), skip)
        viewport = self.viewport(edges, width, height)
        if viewport is None:
            warnings.warn(f"{attractor.name}: orbit diverged (bounds {edges}), rendering blank canvas",
                          RuntimeWarning)
            return np.zeros((height, width), dtype=np.int64), 0
        return self.accumulate(attractor, num_steps, skip, viewport, width, height)
