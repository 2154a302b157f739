"""
Render configuration, stored as YAML
"""

import yaml
from dataclasses import dataclass, field
from typing import Dict, Any, Optional

from viz.palette import Palette

# iteration bounds of the high resolution render
ITERATION_LIMITS = (1_000_000, 50_000_000)


@dataclass
class RenderConfig:
    """iteration counts and image sizes for preview and final renders"""
    preview_iterations: int = 100000
    iterations: int = 10000000
    preview_size: int = 512
    width: int = 1024
    height: int = 1024
    seed: Optional[int] = None
    palette: Palette = field(default_factory=Palette)

    def __post_init__(self):
        self._validate()

    def _validate(self):
        for name in ('preview_iterations', 'iterations', 'preview_size', 'width', 'height'):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                raise ValueError(f"'{name}' must be a positive integer, got {value!r}")
        if self.seed is not None and not isinstance(self.seed, int):
            raise ValueError(f"'seed' must be an integer, got {self.seed!r}")
        if isinstance(self.palette, dict):
            self.palette = Palette.from_dict(self.palette)

    def clamp_iterations(self, n: int) -> int:
        """clip a high resolution iteration count to ITERATION_LIMITS"""
        low, high = ITERATION_LIMITS
        return min(max(n, low), high)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'preview_iterations': self.preview_iterations,
            'iterations': self.iterations,
            'preview_size': self.preview_size,
            'width': self.width,
            'height': self.height,
            'seed': self.seed,
            'palette': self.palette.to_dict(),
        }

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> 'RenderConfig':
        known = set(cls.__dataclass_fields__)
        unknown = set(config) - known
        if unknown:
            raise ValueError(f"unknown render config fields: {sorted(unknown)}")
        return cls(**config)

    @classmethod
    def from_yaml(cls, yaml_path: str) -> 'RenderConfig':
        """load render config from yaml file"""
        with open(yaml_path, 'r') as f:
            config = yaml.safe_load(f) or {}
        return cls.from_dict(config)

    def to_yaml(self, yaml_path: str):
        """save render config to yaml file"""
        with open(yaml_path, 'w') as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False)
