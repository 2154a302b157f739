"""
Base class for density-rendered attractors
"""

import numpy as np
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Tuple, Optional

from attractors.state import State
from compute.cpu_backend import CPUBackend
from viz.palette import Palette, exposure_factor
from viz.image import save_png


@dataclass
class AttractorConfig:
    name: str
    map_str: str
    coefs: List[float]
    ranges: List[Tuple[float, float]]
    speeds: List[float]
    dim: int = 2
    x_range: Tuple[float, float] = (-1.0, 1.0)
    dt: Optional[float] = None


@dataclass
class RenderCache:
    """normalized density grid of the last render with its (n, w, h) key"""
    key: Tuple[int, int, int]
    density: np.ndarray


class Attractor(ABC):
    # transient steps dropped before the bounding box and the histogram
    skip = 500
    # whether the normalized histogram survives palette-only re-renders
    caches_histogram = False
    backend = CPUBackend()

    def __init__(self, config: AttractorConfig, state: Optional[State] = None):
        assert len(config.coefs) == len(config.ranges) == len(config.speeds)
        self.config = config
        self._coefs = np.asarray(config.coefs, dtype=np.float64)
        self.state = state if state is not None else State(config.dim, config.x_range, config.dt)
        assert self.state.n == config.dim, f"{config.name} needs a {config.dim}-dimensional state"
        self._cache: Optional[RenderCache] = None

    @staticmethod
    @abstractmethod
    def step(c, xs, t, dt):
        """advance xs in place by one iteration; return the new simulated time"""

    @staticmethod
    @abstractmethod
    def orbit(c, xs, t, dt, out):
        """run `step` out.shape[0] times, storing projected points in out"""

    def edge_samples(self, num_iterations: int) -> int:
        """length of the bounding box search run"""
        return 50000

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def map_str(self) -> str:
        return self.config.map_str

    def coefs(self) -> np.ndarray:
        """coefficient vector; call param_changed(True) after editing it in place"""
        return self._coefs

    def coefs_mut(self) -> np.ndarray:
        return self._coefs

    def coef_ranges(self) -> List[Tuple[float, float]]:
        return list(self.config.ranges)

    def speeds(self) -> List[float]:
        return list(self.config.speeds)

    def set_coef(self, index: int, value: float) -> None:
        low, high = self.config.ranges[index]
        self._coefs[index] = min(max(float(value), low), high)
        self.param_changed(True)

    def set_coefs(self, values) -> None:
        values = np.asarray(values, dtype=np.float64)
        if values.shape != self._coefs.shape:
            raise ValueError(f"{self.name} takes {len(self._coefs)} coefficients, got {values.size}")
        self._coefs = values.copy()
        self.param_changed(True)

    def set_init_x(self, values) -> None:
        self.state.set_init_x(values)
        self.param_changed(True)

    def set_dt(self, dt: float) -> None:
        self.state.set_dt(dt)
        self.param_changed(True)

    def change_random_coefs(self, rng=None) -> None:
        """redraw every coefficient uniformly from its own range"""
        rng = rng if rng is not None else np.random.default_rng()
        self._coefs = np.array([rng.uniform(low, high) for low, high in self.config.ranges],
                               dtype=np.float64)
        self.param_changed(True)

    def set_random_init(self, rng=None) -> None:
        self.state.set_random_init(rng)
        self.param_changed(True)

    @classmethod
    def random(cls, rng=None) -> 'Attractor':
        attractor = cls()
        attractor.change_random_coefs(rng)
        return attractor

    def param_changed(self, flag: bool) -> None:
        """mark the cached histogram stale; False leaves the cache as it is"""
        if flag:
            self._cache = None

    @property
    def is_dirty(self) -> bool:
        return self._cache is None

    def apply_map_func(self) -> None:
        """advance the state by exactly one step"""
        dt = self.state.dt if self.state.dt is not None else 0.0
        self.state.time = float(self.step(self._coefs, self.state.x, self.state.time, dt))

    def evolve_point(self, xs, t: float = 0.0) -> Tuple[np.ndarray, float]:
        """pure form of one step: returns (new_xs, new_t), instance state untouched"""
        xs = np.array(xs, dtype=np.float64)
        dt = self.state.dt if self.state.dt is not None else 0.0
        t = float(self.step(self._coefs, xs, float(t), dt))
        return xs, t

    def histogram(self, num_iterations: int, width: int, height: int) -> Tuple[np.ndarray, int]:
        """raw visit counts (height, width) and the largest count"""
        _check_render_args(num_iterations, width, height)
        return self.backend.histogram(self, num_iterations, width, height)

    def density(self, num_iterations: int, width: int, height: int) -> np.ndarray:
        """histogram normalized by its maximum, reused when cached and still valid"""
        key = (num_iterations, width, height)
        if self.caches_histogram and self._cache is not None and self._cache.key == key:
            return self._cache.density

        hist, max_count = self.histogram(num_iterations, width, height)
        if max_count > 0:
            density = hist / float(max_count)
        else:
            density = np.zeros(hist.shape, dtype=np.float64)

        if self.caches_histogram:
            self._cache = RenderCache(key, density)
        return density

    def gen_img(self, num_iterations: int, width: int, height: int,
                palette: Optional[Palette] = None) -> np.ndarray:
        """render an (height, width, 3) uint8 image"""
        palette = palette if palette is not None else Palette()
        density = self.density(num_iterations, width, height)
        return palette.colorize(density, exposure_factor(num_iterations, width, height))

    def save_img(self, path, num_iterations: int, width: int, height: int,
                 palette: Optional[Palette] = None) -> str:
        return save_png(path, self.gen_img(num_iterations, width, height, palette))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(coefs={self._coefs.tolist()}, state={self.state!r})"


def _check_render_args(num_iterations: int, width: int, height: int) -> None:
    for label, value in (('num_iterations', num_iterations), ('width', width), ('height', height)):
        if int(value) != value or value <= 0:
            raise ValueError(f"{label} must be a positive integer, got {value}")
