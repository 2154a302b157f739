"""
Parameter records and render configuration
"""

from .records import PersistenceError, to_record, from_record, save_params, load_params
from .config import RenderConfig, ITERATION_LIMITS

__all__ = ['PersistenceError', 'to_record', 'from_record', 'save_params', 'load_params',
           'RenderConfig', 'ITERATION_LIMITS']
