"""
Double pendulum integrated with 4th-order Runge-Kutta
"""

import math
import numpy as np

from .base import Attractor, AttractorConfig
from compute.cpu_backend import jit_kernel, make_orbit_kernel

TAU = 2.0 * math.pi


@jit_kernel
def pendulum_derivatives(c, th1, th2, w1, w2):
    """d/dt of (theta1, theta2, omega1, omega2); masses c0, c1, lengths c2, c3, gravity c4"""
    m = c[1] / c[0]
    l = c[3] / c[2]
    g = c[4] / c[2]
    dc = math.cos(th1 - th2)
    ds = math.sin(th1 - th2)
    den = 1.0 + m * ds * ds
    dw1 = -((1.0 + m) * g * math.sin(th1) + m * l * w2 * w2 * ds
            + m * dc * (w1 * w1 * ds - g * math.sin(th2))) / den
    dw2 = ((1.0 + m) * (w1 * w1 * ds - g * math.sin(th2))
           + dc * ((1.0 + m) * g * math.sin(th1) + m * l * w2 * w2 * ds)) / (l * den)
    return w1, w2, dw1, dw2


@jit_kernel
def double_pendulum_step(c, xs, t, dt):
    th1, th2, w1, w2 = xs[0], xs[1], xs[2], xs[3]
    h = 0.5 * dt
    k1 = pendulum_derivatives(c, th1, th2, w1, w2)
    k2 = pendulum_derivatives(c, th1 + k1[0] * h, th2 + k1[1] * h, w1 + k1[2] * h, w2 + k1[3] * h)
    k3 = pendulum_derivatives(c, th1 + k2[0] * h, th2 + k2[1] * h, w1 + k2[2] * h, w2 + k2[3] * h)
    k4 = pendulum_derivatives(c, th1 + k3[0] * dt, th2 + k3[1] * dt, w1 + k3[2] * dt, w2 + k3[3] * dt)
    xs[0] = np.fmod(th1 + (k1[0] + 2.0 * k2[0] + 2.0 * k3[0] + k4[0]) * dt / 6.0, TAU)
    xs[1] = np.fmod(th2 + (k1[1] + 2.0 * k2[1] + 2.0 * k3[1] + k4[1]) * dt / 6.0, TAU)
    xs[2] = w1 + (k1[2] + 2.0 * k2[2] + 2.0 * k3[2] + k4[2]) * dt / 6.0
    xs[3] = w2 + (k1[3] + 2.0 * k2[3] + 2.0 * k3[3] + k4[3]) * dt / 6.0
    return t + dt


@jit_kernel
def project_bob(c, xs):
    """position of the lower bob"""
    x1 = c[2] * math.sin(xs[0])
    y1 = c[2] * math.cos(xs[0])
    return x1 + c[3] * math.sin(xs[1]), y1 + c[3] * math.cos(xs[1])


class DoublePendulum(Attractor):
    skip = 0
    caches_histogram = True
    step = staticmethod(double_pendulum_step)
    orbit = staticmethod(make_orbit_kernel(double_pendulum_step, project_bob))

    def __init__(self):
        config = AttractorConfig(
            name="DoublePendulum",
            map_str=("Runge-Kutta 4, state (theta1, theta2, omega1, omega2), "
                     "mass: a0, a1, length: a2, a3, g: a4"),
            coefs=[1.0, 1.0, 1.0, 1.0, 9.8],
            ranges=[(0.1, 2.0), (0.1, 2.0), (0.1, 2.0), (0.1, 2.0), (0.0, 10.0)],
            speeds=[0.001] * 5,
            dim=4,
            x_range=(-TAU, TAU),
            dt=0.0005,
        )
        super().__init__(config)

    def edge_samples(self, num_iterations: int) -> int:
        return max(50000, num_iterations // 10)
