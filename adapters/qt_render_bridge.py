from PySide6.QtCore import QObject, Signal
from PySide6.QtGui import QImage

from api.view_model import FractalViewModel
from utils.image_helpers import ndarray_to_qimage
from rendering.events import FrameEvent, LogEvent


class QtRenderBridge(QObject):
    """
    Thin adapter that converts service events to Qt signals for the UI.
    Events arrive on worker threads; queued signal delivery moves them to
    the GUI thread.
    """
    # (target, full frame, frame_w, frame_h)
    image_updated = Signal(str, QImage, int, int)
    log_text = Signal(str)

    def __init__(self, model: FractalViewModel, parent=None):
        super().__init__(parent)
        self.model = model

        # Subscribe to model events with conversions
        self.model.on_frame(self._on_frame)
        self.model.on_log(self._on_log)

    # --------- Conversions ---------------------
    def _on_frame(self, evt: FrameEvent) -> None:
        qimg = ndarray_to_qimage(evt.raster.pixels)
        self.image_updated.emit(evt.target, qimg, evt.raster.width, evt.raster.height)

    def _on_log(self, evt: LogEvent) -> None:
        prefix = f"[{evt.level}] " if evt.level else ""
        self.log_text.emit(prefix + evt.message)
