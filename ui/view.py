import sys
from datetime import datetime

from PySide6.QtCore import Qt, QTimer
from PySide6.QtGui import QImage, QTextCursor
from PySide6.QtWidgets import (
    QApplication, QMainWindow, QLabel, QVBoxLayout, QWidget, QHBoxLayout,
    QDockWidget, QFormLayout, QCheckBox, QPlainTextEdit
)

from adapters.qt_render_bridge import QtRenderBridge
from api.view_model import FractalViewModel
from fractals.validation import FractalParameterError
from ui.view_components import (FractalDisplay, SLIDER_SCALE,
                                make_bound_slider, make_bound_spinbox)
from utils.config import ExplorerConfig
from utils.enums import RenderTarget

REAL_RANGE = (-2.0, 2.0)
IMAGINARY_RANGE = (-1.0, 1.0)


# =============================================================================
# Main Window
# =============================================================================
class FractalViewer(QMainWindow):
    # ---------- Construction & UI wiring ----------
    def __init__(self, config: ExplorerConfig | None = None,
                 model: FractalViewModel | None = None):
        super().__init__()
        self.setWindowTitle("Fractal visualization")
        self.config = config or ExplorerConfig()
        self.model = model or FractalViewModel(self.config)

        # Bridge: worker-thread events -> GUI-thread signals
        self.bridge = QtRenderBridge(self.model, parent=self)
        self.bridge.image_updated.connect(self.update_image)
        self.bridge.log_text.connect(self.log)
        self._unsubscribe = self.model.subscribe(self._on_model_changed)

        self.displays = {
            RenderTarget.MANDELBROT: FractalDisplay(self.model.width, self.model.height, self),
            RenderTarget.JULIA: FractalDisplay(self.model.width, self.model.height, self),
        }
        self.displays[RenderTarget.JULIA].pointer_moved.connect(self._on_julia_pointer)

        self._build_ui()

    def _build_ui(self):
        vp = self.model.viewport

        # ----- Controls -----
        controls = QFormLayout()
        self.real_start_label = QLabel()
        self.real_start_input = make_bound_slider(*REAL_RANGE, vp.real_start)
        self.real_end_label = QLabel()
        self.real_end_input = make_bound_slider(*REAL_RANGE, vp.real_end)
        self.imag_start_input = make_bound_spinbox(*IMAGINARY_RANGE, vp.imaginary_start)
        self.imag_end_input = make_bound_spinbox(*IMAGINARY_RANGE, vp.imaginary_end)
        self.colors_check = QCheckBox()
        self.colors_check.setChecked(self.model.colors)

        controls.addRow(self.real_start_label, self.real_start_input)
        controls.addRow(self.real_end_label, self.real_end_input)
        controls.addRow("Imaginary start", self.imag_start_input)
        controls.addRow("Imaginary end", self.imag_end_input)
        controls.addRow("Colors", self.colors_check)
        self._update_bound_labels()

        self.real_start_input.valueChanged.connect(
            lambda v: self._change_bound("real_start", v / SLIDER_SCALE, self.real_start_input))
        self.real_end_input.valueChanged.connect(
            lambda v: self._change_bound("real_end", v / SLIDER_SCALE, self.real_end_input))
        self.imag_start_input.valueChanged.connect(
            lambda v: self._change_bound("imaginary_start", v, self.imag_start_input))
        self.imag_end_input.valueChanged.connect(
            lambda v: self._change_bound("imaginary_end", v, self.imag_end_input))
        self.colors_check.toggled.connect(self.model.set_colors)

        # ----- Displays -----
        layout = QVBoxLayout()
        layout.setContentsMargins(16, 8, 12, 8)
        layout.addLayout(controls)

        mandel_title = QLabel("<h2>Mandelbrot</h2>")
        layout.addWidget(mandel_title)
        layout.addWidget(self.displays[RenderTarget.MANDELBROT], 1)

        julia_header = QHBoxLayout()
        julia_header.addWidget(QLabel("<h2>Julia set</h2>"))
        self.julia_label = QLabel()
        self._update_julia_label()
        julia_header.addWidget(self.julia_label)
        julia_header.addStretch(1)
        layout.addLayout(julia_header)
        layout.addWidget(self.displays[RenderTarget.JULIA], 1)

        container = QWidget()
        container.setLayout(layout)
        self.setCentralWidget(container)

        # Log dock
        self.log_dock = QDockWidget("Log", self)
        self.log_dock.setAllowedAreas(Qt.DockWidgetArea.RightDockWidgetArea)
        self.log_dock.setFeatures(QDockWidget.DockWidgetFeature.NoDockWidgetFeatures)
        self.log_view = QPlainTextEdit(self)
        self.log_view.setReadOnly(True)
        self.log_view.setMaximumBlockCount(5000)
        self.log_view.setStyleSheet(
            "background: #0f0f10; color: #cfd2d6; font-family: Consolas, monospace; font-size: 11px;"
        )
        self.log_dock.setWidget(self.log_view)
        self.addDockWidget(Qt.DockWidgetArea.RightDockWidgetArea, self.log_dock)

    # ---------- Control handlers ----------
    def _change_bound(self, name: str, value: float, widget) -> None:
        try:
            self.model.update_bounds(**{name: float(value)})
        except FractalParameterError as e:
            self.log(str(e))
            # restore the control to the accepted state
            current = getattr(self.model.viewport, name)
            widget.blockSignals(True)
            if widget in (self.real_start_input, self.real_end_input):
                widget.setValue(int(round(current * SLIDER_SCALE)))
            else:
                widget.setValue(current)
            widget.blockSignals(False)
        self._update_bound_labels()

    def _on_julia_pointer(self, x: float, y: float, label_w: int, label_h: int) -> None:
        self.model.julia_from_pointer(x, y, label_w, label_h)

    def _on_model_changed(self, field: str, value: object) -> None:
        if field == "julia":
            self._update_julia_label()
        elif field == "viewport":
            self._update_bound_labels()

    def _update_bound_labels(self) -> None:
        vp = self.model.viewport
        self.real_start_label.setText(f"Real start ({vp.real_start:g})")
        self.real_end_label.setText(f"Real end ({vp.real_end:g})")

    def _update_julia_label(self) -> None:
        c = self.model.julia
        self.julia_label.setText(f"<h3>C: {c.x}, {c.y}</h3>")

    # ---------- Renderer callbacks ----------
    def update_image(self, target: str, image: QImage, frame_w: int, frame_h: int):
        display = self.displays[RenderTarget(target)]
        display.show_frame(image)

    def log(self, msg: str):
        timestamp = datetime.now().strftime("%H:%M:%S.%f")[:-3]
        line = f"[{timestamp}] {msg}"
        self.log_view.appendPlainText(line)
        self.log_view.moveCursor(QTextCursor.MoveOperation.End)

    def render_fractal(self):
        self.model.refresh()

    # ---------- Qt events ----------
    def closeEvent(self, event):
        self._unsubscribe()
        self.model.shutdown()
        event.accept()


# =============================================================================
# Entrypoint
# =============================================================================
if __name__ == "__main__":
    app = QApplication(sys.argv)
    viewer = FractalViewer()
    viewer.show()
    QTimer.singleShot(0, viewer.render_fractal)
    sys.exit(app.exec())
