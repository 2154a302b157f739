"""
Forced Duffing oscillator (explicit Euler)
"""

import math

from .base import Attractor, AttractorConfig
from compute.cpu_backend import jit_kernel, make_orbit_kernel, project_xy


@jit_kernel
def duffing_step(c, xs, t, dt):
    x, y = xs[0], xs[1]
    xs[0] = x + y * dt
    xs[1] = y + (x - x * x * x - c[0] * y + c[1] * math.cos(c[2] * t)) * dt
    return t + dt


class DuffingOscillator(Attractor):
    skip = 0
    step = staticmethod(duffing_step)
    orbit = staticmethod(make_orbit_kernel(duffing_step, project_xy))

    def __init__(self):
        config = AttractorConfig(
            name="Duffing Attractor",
            map_str="dx/dt = y, dy/dt = x - x^3 - a0 * y + a1 * cos(a2 * t)",
            coefs=[0.5] * 3,
            ranges=[(-1.0, 1.0), (-1.0, 1.0), (-5.0, 5.0)],
            speeds=[0.001] * 3,
            dt=0.0005,
        )
        super().__init__(config)

    def edge_samples(self, num_iterations: int) -> int:
        return max(100000, num_iterations // 10)
