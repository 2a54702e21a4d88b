import numpy as np
from PySide6.QtGui import QImage


def ndarray_to_qimage(rgb: np.ndarray) -> QImage:
    """
    Convert an (H, W, 3) uint8 buffer to a QImage in one bulk copy.
    The returned image owns its memory.
    """
    if rgb.ndim != 3 or rgb.shape[2] != 3:
        raise ValueError(f"Expected an (H, W, 3) array, got shape {rgb.shape}")
    buf = np.ascontiguousarray(rgb, dtype=np.uint8)
    h, w, _ = buf.shape
    return QImage(buf.data, w, h, 3 * w, QImage.Format.Format_RGB888).copy()
