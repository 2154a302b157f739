"""
Lorenz system (explicit Euler), drawn on the x-z plane
"""

from .base import Attractor, AttractorConfig
from compute.cpu_backend import jit_kernel, make_orbit_kernel


@jit_kernel
def lorenz_step(c, xs, t, dt):
    x, y, z = xs[0], xs[1], xs[2]
    xs[0] = x + c[0] * (y - x) * dt
    xs[1] = y + (x * (c[1] - z) - y) * dt
    xs[2] = z + (x * y - c[2] * z) * dt
    return t + dt


@jit_kernel
def project_xz(c, xs):
    return xs[0], xs[2]


class LorenzSystem(Attractor):
    skip = 0
    step = staticmethod(lorenz_step)
    orbit = staticmethod(make_orbit_kernel(lorenz_step, project_xz))

    def __init__(self):
        config = AttractorConfig(
            name="Lorenz Attractor",
            map_str="dx/dt = a0 * (y - x), dy/dt = x * (a1 - z) - y, dz/dt = x * y - a2 * z",
            coefs=[0.5] * 3,
            ranges=[(-20.0, 20.0), (-30.0, 30.0), (-5.0, 5.0)],
            speeds=[0.01] * 3,
            dim=3,
            x_range=(0.0, 20.0),
            dt=0.0001,
        )
        super().__init__(config)

    def edge_samples(self, num_iterations: int) -> int:
        return max(100000, num_iterations // 10)
