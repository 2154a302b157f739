"""
Clifford map implementation
"""

import math

from .base import Attractor, AttractorConfig
from compute.cpu_backend import jit_kernel, make_orbit_kernel, project_xy


@jit_kernel
def clifford_step(c, xs, t, dt):
    x, y = xs[0], xs[1]
    xs[0] = c[0] * math.sin(c[1] * y) + c[2] * math.cos(c[3] * x)
    xs[1] = c[4] * math.sin(c[5] * x) + c[6] * math.cos(c[7] * y)
    return t


class CliffordMap(Attractor):
    step = staticmethod(clifford_step)
    orbit = staticmethod(make_orbit_kernel(clifford_step, project_xy))

    def __init__(self):
        config = AttractorConfig(
            name="Clifford Attractor",
            map_str="x = a0 * sin(a1 * y) + a2 * cos(a3 * x), y = a4 * sin(a5 * x) + a6 * cos(a7 * y)",
            coefs=[1.0] * 8,
            ranges=[(-2.0, 2.0)] * 8,
            speeds=[0.001] * 8,
            x_range=(-2.0, 2.0),
        )
        super().__init__(config)
