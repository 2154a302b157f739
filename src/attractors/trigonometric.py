"""
Trigonometric map implementation
"""

import math

from .base import Attractor, AttractorConfig
from compute.cpu_backend import jit_kernel, make_orbit_kernel, project_xy


@jit_kernel
def trigonometric_step(c, xs, t, dt):
    x, y = xs[0], xs[1]
    xs[0] = math.sin(c[0] * x * x + c[1] * x * y + c[2] * y * y + c[3])
    xs[1] = math.cos(c[4] * x * x + c[5] * x * y + c[6] * y * y + c[7])
    return t


class TrigonometricMap(Attractor):
    step = staticmethod(trigonometric_step)
    orbit = staticmethod(make_orbit_kernel(trigonometric_step, project_xy))

    def __init__(self):
        config = AttractorConfig(
            name="Trigonometric Attractor",
            map_str="x = sin(a0 * x^2 + a1 * xy + a2 * y^2 + a3), y = cos(a4 * x^2 + a5 * xy + a6 * y^2 + a7)",
            coefs=[1.0] * 8,
            ranges=[(-5.0, 5.0)] * 8,
            speeds=[0.001] * 8,
        )
        super().__init__(config)
