from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QImage, QPixmap
from PySide6.QtWidgets import QDoubleSpinBox, QLabel, QSizePolicy, QSlider


# ---------- Fractal display ----------
class FractalDisplay(QLabel):
    """
    Shows one rendered frame, scaled to the label, and reports pointer
    motion in label pixels.
    """
    # (x, y, label_w, label_h)
    pointer_moved = Signal(float, float, int, int)

    def __init__(self, frame_w: int, frame_h: int, parent=None):
        super().__init__(parent)
        self.frame_w = int(frame_w)
        self.frame_h = int(frame_h)
        self.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.setScaledContents(True)
        self.setSizePolicy(QSizePolicy.Policy.Ignored, QSizePolicy.Policy.Ignored)
        self.setMinimumSize(self.frame_w // 4, self.frame_h // 4)
        self.setMouseTracking(True)
        self.setStyleSheet("background: #000;")

    def show_frame(self, image: QImage) -> None:
        if image is None or image.isNull():
            return
        self.setPixmap(QPixmap.fromImage(image))

    def heightForWidth(self, width: int) -> int:
        return int(round(width * self.frame_h / max(1, self.frame_w)))

    def hasHeightForWidth(self) -> bool:
        return True

    def mouseMoveEvent(self, event):
        pos = event.position()
        self.pointer_moved.emit(float(pos.x()), float(pos.y()), self.width(), self.height())
        super().mouseMoveEvent(event)


# ---------- Bound inputs ----------
SLIDER_SCALE = 100


def make_bound_slider(minimum: float, maximum: float, value: float) -> QSlider:
    """Horizontal slider over [minimum, maximum] with a 0.01 step."""
    slider = QSlider(Qt.Orientation.Horizontal)
    slider.setRange(int(round(minimum * SLIDER_SCALE)), int(round(maximum * SLIDER_SCALE)))
    slider.setSingleStep(1)
    slider.setValue(int(round(value * SLIDER_SCALE)))
    return slider


def make_bound_spinbox(minimum: float, maximum: float, value: float) -> QDoubleSpinBox:
    box = QDoubleSpinBox()
    box.setRange(minimum, maximum)
    box.setSingleStep(0.01)
    box.setDecimals(2)
    box.setValue(value)
    return box
