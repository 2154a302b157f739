"""
PNG output and on-screen preview of rendered attractors
"""

import os
import numpy as np
import matplotlib.pyplot as plt


def save_png(path, rgb: np.ndarray) -> str:
    """write an (h, w, 3) uint8 image; encoder and filesystem errors propagate"""
    path = os.fspath(path)
    plt.imsave(path, np.ascontiguousarray(rgb, dtype=np.uint8), format='png')
    return path


def show_image(rgb: np.ndarray, title: str = '', elapsed: float = None) -> None:
    """display a rendered image in a matplotlib window"""
    plt.style.use('dark_background')
    fig, ax = plt.subplots(figsize=(8, 8))
    ax.imshow(rgb, interpolation='nearest')
    ax.set_axis_off()
    if elapsed is not None:
        title = f"{title} ({elapsed:.3f} sec)"
    ax.set_title(title, color='white')
    plt.tight_layout()
    plt.show()
    plt.close(fig)
