"""
General 2D quadratic map implementation
"""

from .base import Attractor, AttractorConfig
from compute.cpu_backend import jit_kernel, make_orbit_kernel, project_xy


@jit_kernel
def quadratic_step(c, xs, t, dt):
    x, y = xs[0], xs[1]
    xs[0] = c[0] * x * x + c[1] * x + c[2] * x * y + c[3] * y + c[4] * y * y + c[5]
    xs[1] = c[6] * x * x + c[7] * x + c[8] * x * y + c[9] * y + c[10] * y * y + c[11]
    return t


class QuadraticMap(Attractor):
    caches_histogram = True
    step = staticmethod(quadratic_step)
    orbit = staticmethod(make_orbit_kernel(quadratic_step, project_xy))

    def __init__(self):
        config = AttractorConfig(
            name="Quadratic Attractor",
            map_str=("x = a0 * x^2 + a1 * x + a2 * x * y + a3 * y + a4 * y^2 + a5, "
                     "y = a6 * x^2 + a7 * x + a8 * x * y + a9 * y + a10 * y^2 + a11"),
            coefs=[1.0] * 12,
            ranges=[(-1.5, 1.5)] * 12,
            speeds=[0.001] * 12,
        )
        super().__init__(config)
