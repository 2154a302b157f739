"""
Phase-space state shared by every attractor
"""

import numpy as np
from typing import Dict, Any, Optional, Sequence, Tuple


class State:
    """current point, initial point and simulated time of one trajectory"""

    def __init__(self, n: int = 2, x_range: Tuple[float, float] = (-1.0, 1.0),
                 dt: Optional[float] = None):
        self.n = n
        self.x = np.full(n, 0.5, dtype=np.float64)
        self.init_x = np.full(n, 0.5, dtype=np.float64)
        self.x_range = (float(x_range[0]), float(x_range[1]))
        self.time = 0.0
        self.dt = dt
        # UI bound for the step size slider
        self.dt_range = dt * 100.0 if dt is not None else None

    def set_init(self) -> None:
        """rewind the trajectory to its initial condition"""
        self.time = 0.0
        self.x = self.init_x.copy()

    def set_random_init(self, rng=None) -> None:
        """draw every initial component uniformly from x_range"""
        rng = rng if rng is not None else np.random.default_rng()
        low, high = self.x_range
        self.init_x = np.array([rng.uniform(low, high) for _ in range(self.n)], dtype=np.float64)

    def get_init_x(self) -> np.ndarray:
        return self.init_x

    def set_init_x(self, values: Sequence[float]) -> None:
        """replace the initial point, clipped to x_range"""
        values = np.asarray(values, dtype=np.float64)
        assert values.shape == (self.n,), f"expected {self.n} components, got {values.shape}"
        self.init_x = np.clip(values, *self.x_range)

    def get_dt(self) -> Optional[float]:
        return self.dt

    def set_dt(self, dt: float) -> None:
        if self.dt is None:
            raise ValueError("discrete map has no time step")
        if not 0.0 <= dt <= self.dt_range:
            raise ValueError(f"dt must lie in [0, {self.dt_range}], got {dt}")
        self.dt = float(dt)

    def get_xs(self) -> np.ndarray:
        return self.x

    def get_xs_mut(self) -> np.ndarray:
        return self.x

    def set_xs(self, xs: Sequence[float]) -> None:
        xs = np.asarray(xs, dtype=np.float64)
        assert xs.shape == (self.n,), f"expected {self.n} components, got {xs.shape}"
        self.x = xs.copy()

    def get_xy(self) -> Tuple[float, float]:
        assert self.n >= 2
        return float(self.x[0]), float(self.x[1])

    def set_xy(self, x: float, y: float) -> None:
        assert self.n >= 2
        self.x[0] = x
        self.x[1] = y

    def get_xyz(self) -> Tuple[float, float, float]:
        assert self.n >= 3
        return float(self.x[0]), float(self.x[1]), float(self.x[2])

    def set_xyz(self, x: float, y: float, z: float) -> None:
        assert self.n >= 3
        self.x[0] = x
        self.x[1] = y
        self.x[2] = z

    def to_dict(self) -> Dict[str, Any]:
        return {
            'n': self.n,
            'x': self.x.tolist(),
            'init_x': self.init_x.tolist(),
            'x_range': {'start': self.x_range[0], 'end': self.x_range[1]},
            'time': self.time,
            'dt': self.dt,
            'dt_range': self.dt_range,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'State':
        x_range = data['x_range']
        state = cls(int(data['n']), (x_range['start'], x_range['end']), data.get('dt'))
        state.x = np.asarray(data['x'], dtype=np.float64)
        state.init_x = np.asarray(data['init_x'], dtype=np.float64)
        if state.x.shape != (state.n,) or state.init_x.shape != (state.n,):
            raise ValueError(f"state vectors do not match dimension {state.n}")
        state.time = float(data.get('time', 0.0))
        if data.get('dt_range') is not None:
            state.dt_range = float(data['dt_range'])
        return state

    def __repr__(self) -> str:
        return f"State(n={self.n}, x={self.x.tolist()}, time={self.time:.4f}, dt={self.dt})"
