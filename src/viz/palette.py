"""
Cosine palette and tone mapping of density histograms
"""

import math
import numpy as np
from dataclasses import dataclass, fields, asdict
from typing import Dict, Tuple, Any

TAU = 2.0 * math.pi

Channel = Tuple[float, float, float, float]  # baseline, amplitude, frequency, phase offset


def exposure_factor(num_iterations: int, width: int, height: int) -> float:
    """keeps apparent brightness comparable across iteration counts and image sizes"""
    return math.sqrt(10_000_000.0 / num_iterations) * (width * height) / (1024.0 * 1024.0) * 100.0


def _random_channel(rng) -> Channel:
    return (
        float(rng.uniform(0.5, 1.0)),
        float(rng.uniform(0.0, 0.5)),
        float(rng.uniform(0.5, 1.5)),
        float(rng.uniform(0.0, 1.0)),
    )


@dataclass
class Palette:
    r: Channel = (0.5, 0.25, 1.0, 0.0)
    g: Channel = (0.5, 0.25, 1.0, 0.33)
    b: Channel = (0.5, 0.25, 1.0, 0.67)
    colver1: float = 0.3
    colver2: float = 5.0
    brightness1: float = 0.4
    brightness2: float = 20.0

    @classmethod
    def random(cls, rng=None) -> 'Palette':
        palette = cls()
        palette.change_random(rng)
        return palette

    def change_random(self, rng=None) -> None:
        """redraw the three channels, keep the phase/brightness curves"""
        rng = rng if rng is not None else np.random.default_rng()
        self.r = _random_channel(rng)
        self.g = _random_channel(rng)
        self.b = _random_channel(rng)

    def phase(self, v):
        return np.power(v, self.colver1) * self.colver2

    def brightness(self, b):
        return np.power(b, self.brightness1) * self.brightness2

    def get_col(self, v: float, b: float, factor: float) -> Tuple[int, int, int]:
        """color of one pixel with density v and brightness input b"""
        rgb = self._channels(np.asarray(v, dtype=np.float64), np.asarray(b, dtype=np.float64), factor)
        return int(rgb[0]), int(rgb[1]), int(rgb[2])

    def colorize(self, density: np.ndarray, factor: float) -> np.ndarray:
        """tone-map a normalized density grid into an (h, w, 3) uint8 image"""
        density = np.asarray(density, dtype=np.float64)
        return self._channels(density, density, factor)

    def _channels(self, v: np.ndarray, b: np.ndarray, factor: float) -> np.ndarray:
        with np.errstate(all='ignore'):
            x = self.phase(v)
            y = self.brightness(b) * factor
            rgb = np.stack([
                (c[0] + c[1] * np.cos((c[2] * x + c[3]) * TAU)) * y
                for c in (self.r, self.g, self.b)
            ], axis=-1)
        rgb = np.nan_to_num(rgb, nan=0.0, posinf=255.0, neginf=0.0)
        return np.clip(rgb, 0.0, 255.0).astype(np.uint8)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        for key in ('r', 'g', 'b'):
            data[key] = list(data[key])
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Palette':
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"unknown palette fields: {sorted(unknown)}")
        kwargs = dict(data)
        for key in ('r', 'g', 'b'):
            if key in kwargs:
                channel = tuple(float(v) for v in kwargs[key])
                if len(channel) != 4:
                    raise ValueError(f"palette channel '{key}' needs 4 values, got {len(channel)}")
                kwargs[key] = channel
        return cls(**kwargs)
