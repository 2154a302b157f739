"""
Attractor implementations and registry
"""

from .state import State
from .base import Attractor, AttractorConfig, RenderCache
from .trigonometric import TrigonometricMap
from .clifford import CliffordMap
from .quadratic import QuadraticMap
from .polar import PolarMap
from .symmetric import SymmetricMap
from .duffing import DuffingOscillator
from .lorenz import LorenzSystem
from .double_pendulum import DoublePendulum

# available attractors registry, keyed for the command line
AVAILABLE_ATTRACTORS = {
    'trigonometric': TrigonometricMap,
    'clifford': CliffordMap,
    'quadratic': QuadraticMap,
    'symmetric': SymmetricMap,
    'polar': PolarMap,
    'duffing': DuffingOscillator,
    'lorenz': LorenzSystem,
    'double-pendulum': DoublePendulum,
}

# display names, also the discriminator of saved parameter records
ATTRACTORS_BY_NAME = {
    'Trigonometric Attractor': TrigonometricMap,
    'Clifford Attractor': CliffordMap,
    'Quadratic Attractor': QuadraticMap,
    'Symmetric Attractor': SymmetricMap,
    'Polar Attractor': PolarMap,
    'Duffing Attractor': DuffingOscillator,
    'Lorenz Attractor': LorenzSystem,
    'DoublePendulum': DoublePendulum,
}


def create_attractor(key: str) -> Attractor:
    """instantiate an attractor by registry key or display name"""
    if key in AVAILABLE_ATTRACTORS:
        return AVAILABLE_ATTRACTORS[key]()
    if key in ATTRACTORS_BY_NAME:
        return ATTRACTORS_BY_NAME[key]()
    raise ValueError(f"unknown attractor '{key}', must be one of {list(AVAILABLE_ATTRACTORS)}")


__all__ = [
    'State', 'Attractor', 'AttractorConfig', 'RenderCache',
    'TrigonometricMap', 'CliffordMap', 'QuadraticMap', 'PolarMap', 'SymmetricMap',
    'DuffingOscillator', 'LorenzSystem', 'DoublePendulum',
    'AVAILABLE_ATTRACTORS', 'ATTRACTORS_BY_NAME', 'create_attractor',
]
