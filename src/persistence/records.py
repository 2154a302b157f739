"""
JSON parameter records for saving and loading attractors
"""

import json
import numpy as np
from typing import Dict, Any

from attractors import ATTRACTORS_BY_NAME, Attractor, State


class PersistenceError(ValueError):
    """a parameter record cannot be turned back into an attractor"""


def to_record(attractor: Attractor) -> Dict[str, Any]:
    """name, formula, coefficient ranges/speeds/values and state of an attractor"""
    return {
        'name': attractor.name,
        'map_str': attractor.map_str,
        'range': [{'start': low, 'end': high} for low, high in attractor.coef_ranges()],
        'speeds': attractor.speeds(),
        'coefs': attractor.coefs().tolist(),
        'state': attractor.state.to_dict(),
    }


def from_record(record: Dict[str, Any]) -> Attractor:
    """construct the attractor a record describes, or raise PersistenceError"""
    if not isinstance(record, dict):
        raise PersistenceError(f"record must be a mapping, got {type(record).__name__}")
    name = record.get('name')
    if not isinstance(name, str):
        raise PersistenceError("attractor name not found in record")
    if name not in ATTRACTORS_BY_NAME:
        raise PersistenceError(f"invalid attractor name '{name}'")

    attractor = ATTRACTORS_BY_NAME[name]()
    try:
        coefs = np.asarray(record['coefs'], dtype=np.float64)
        if coefs.shape != attractor.coefs().shape:
            raise PersistenceError(
                f"'{name}' takes {attractor.coefs().size} coefficients, record has {coefs.size}")

        if 'range' in record:
            ranges = [(float(r['start']), float(r['end'])) for r in record['range']]
            if len(ranges) != coefs.size:
                raise PersistenceError(f"'{name}' record has {len(ranges)} ranges for {coefs.size} coefficients")
            attractor.config.ranges = ranges
        if 'speeds' in record:
            speeds = [float(s) for s in record['speeds']]
            if len(speeds) != coefs.size:
                raise PersistenceError(f"'{name}' record has {len(speeds)} speeds for {coefs.size} coefficients")
            attractor.config.speeds = speeds

        state = State.from_dict(record['state'])
    except PersistenceError:
        raise
    except (KeyError, TypeError, ValueError) as e:
        raise PersistenceError(f"malformed '{name}' record: {e}") from e

    if state.n != attractor.state.n:
        raise PersistenceError(f"'{name}' needs a {attractor.state.n}-dimensional state, record has {state.n}")
    if (state.dt is None) != (attractor.state.dt is None):
        raise PersistenceError(f"'{name}' record has an unexpected time step {state.dt}")

    attractor.state = state
    attractor.set_coefs(coefs)
    return attractor


def save_params(attractor: Attractor, path) -> None:
    with open(path, 'w') as f:
        json.dump(to_record(attractor), f, indent=2)


def load_params(path) -> Attractor:
    """load a saved record; filesystem errors propagate, bad content raises PersistenceError"""
    with open(path, 'r') as f:
        try:
            record = json.load(f)
        except json.JSONDecodeError as e:
            raise PersistenceError(f"{path}: not a parameter record ({e})") from e
    return from_record(record)
