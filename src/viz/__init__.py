"""
Palette and image output modules
"""

from .palette import Palette, exposure_factor
from .image import save_png, show_image

__all__ = ['Palette', 'exposure_factor', 'save_png', 'show_image']
