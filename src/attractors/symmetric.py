"""
Symmetric icon map implementation (complex plane)
"""

import numpy as np

from .base import Attractor, AttractorConfig
from compute.cpu_backend import jit_kernel, make_orbit_kernel, project_xy


@jit_kernel
def symmetric_step(c, xs, t, dt):
    z = complex(xs[0], xs[1])
    # z^(a0 - 1) with a0 truncated to an integer degree
    zp = complex(1.0, 0.0)
    for _ in range(int(c[0]) - 1):
        zp = zp * z
    norm_sqr = z.real * z.real + z.imag * z.imag
    w = (c[1] + c[2] * norm_sqr + c[3] * (z * zp).real + c[4] * z * 1j) * z + c[5] * zp
    xs[0] = w.real
    xs[1] = w.imag
    return t


class SymmetricMap(Attractor):
    caches_histogram = True
    step = staticmethod(symmetric_step)
    orbit = staticmethod(make_orbit_kernel(symmetric_step, project_xy))

    def __init__(self):
        config = AttractorConfig(
            name="Symmetric Attractor",
            map_str=("z = (a1 + a2 * |z|^2 + a3 * (z^a0).real + a4 * zi) * z + a5 * z^(a0 - 1) "
                     "(symmetry if a4 == 0)"),
            coefs=[3.0, 2.0, -2.0, 0.0, 0.0, 0.0],
            ranges=[(3.0, 25.0), (-5.0, 5.0), (-5.0, 5.0), (-0.5, 0.5), (-1.0, 1.0), (-1.5, 1.5)],
            speeds=[1.0, 0.001, 0.001, 0.001, 0.001, 0.001],
        )
        super().__init__(config)

    def change_random_coefs(self, rng=None) -> None:
        """integer degree, a1/a2 of opposite sign, the rest uniform"""
        rng = rng if rng is not None else np.random.default_rng()
        ranges = self.config.ranges
        coefs = np.zeros(6, dtype=np.float64)
        coefs[0] = round(rng.uniform(*ranges[0]))
        sgn = 1.0 if rng.uniform(0.0, 1.0) < 0.5 else -1.0
        coefs[1] = rng.uniform(1.0, ranges[1][1]) * sgn
        coefs[2] = rng.uniform(1.0, ranges[2][1]) * -sgn
        for i in range(3, 6):
            coefs[i] = rng.uniform(*ranges[i])
        self._coefs = coefs
        self.param_changed(True)
