"""
Polar map implementation
"""

import math

from .base import Attractor, AttractorConfig
from compute.cpu_backend import jit_kernel, make_orbit_kernel, project_xy


@jit_kernel
def polar_step(c, xs, t, dt):
    x, y = xs[0], xs[1]
    # radius and angle, then back to cartesian shifted up by one
    u = c[0] * math.sin(c[1] * y) + c[2] * math.tanh(1.0 - y * y)
    v = c[3] * (math.sin(c[0] * (2.0 + x * x) / (2.0 - y * y)) - x) + c[4] * x / math.cosh(x + y)
    xs[0] = u * math.cos(v)
    xs[1] = u * math.sin(v) + 1.0
    return t


class PolarMap(Attractor):
    caches_histogram = True
    step = staticmethod(polar_step)
    orbit = staticmethod(make_orbit_kernel(polar_step, project_xy))

    def __init__(self):
        config = AttractorConfig(
            name="Polar Attractor",
            map_str=("r = a0 * sin(a1 * y) + a2 * tanh(1 - y^2), "
                     "th = a3 * (sin(a0 * (2 + x^2) / (2 - y^2)) - x) + a4 * x / cosh(x + y), "
                     "x = r * cos(th), y = r * sin(th) + 1"),
            coefs=[1.0] * 5,
            ranges=[(-3.0, 3.0)] * 5,
            speeds=[0.001] * 5,
        )
        super().__init__(config)
