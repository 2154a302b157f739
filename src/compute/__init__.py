"""
Numba CPU computation backend
"""

from compute.cpu_backend import CPUBackend, Viewport, make_orbit_kernel, project_xy, jit_kernel

__all__ = ['CPUBackend', 'Viewport', 'make_orbit_kernel', 'project_xy', 'jit_kernel']
