"""MainWindow — primary application window."""

from __future__ import annotations

from pathlib import Path

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QAction, QCloseEvent, QKeySequence
from PyQt6.QtWidgets import (
    QComboBox,
    QFileDialog,
    QInputDialog,
    QMainWindow,
    QMessageBox,
    QToolBar,
)

from canvascomposer.config.constants import (
    APP_NAME,
    ASPECT_RATIO_PRESETS,
    EMPTY_RESPONSE_TEXT,
    IMAGE_EXTENSIONS,
)
from canvascomposer.config.settings import AppSettings
from canvascomposer.core.errors import DecodeError, EmptyCompositionError, GenerationError
from canvascomposer.core.session import EditorSession
from canvascomposer.io.exporter import export_png, generate_filename
from canvascomposer.io.generation import (
    GenerationResult,
    GenerationService,
    build_composition_request,
    submit,
)
from canvascomposer.io.importer import ImageSource, decode_image
from canvascomposer.ui.canvas_widget import CanvasWidget
from canvascomposer.ui.layer_panel import LayerPanel


class MainWindow(QMainWindow):
    """Primary application window.

    Owns the EditorSession, the CanvasWidget and the LayerPanel.  Composing
    is available only when a *generation_service* is supplied.
    """

    def __init__(
        self,
        settings: AppSettings | None = None,
        generation_service: GenerationService | None = None,
    ) -> None:
        super().__init__()
        self._settings = settings if settings is not None else AppSettings()
        self._generation_service = generation_service
        self.setWindowTitle(APP_NAME)
        self.resize(1100, 800)

        self._session = EditorSession(parent=self)
        self._canvas = CanvasWidget(self._session)
        self.setCentralWidget(self._canvas)

        self._layer_panel = LayerPanel(self._session.layer_manager, self)
        self.addDockWidget(Qt.DockWidgetArea.RightDockWidgetArea, self._layer_panel)

        self._setup_toolbar()
        self._session.set_aspect_ratio(self._settings.aspect_ratio())

        geometry = self._settings.window_geometry()
        if geometry is not None:
            self.restoreGeometry(geometry)

    # --- accessors ---

    @property
    def session(self) -> EditorSession:
        return self._session

    @property
    def canvas(self) -> CanvasWidget:
        return self._canvas

    @property
    def layer_panel(self) -> LayerPanel:
        return self._layer_panel

    # --- setup ---

    def _setup_toolbar(self) -> None:
        toolbar = QToolBar("Main", self)
        toolbar.setObjectName("mainToolBar")
        self.addToolBar(toolbar)

        add_action = QAction("&Add Images...", self)
        add_action.setShortcut(QKeySequence.StandardKey.Open)
        add_action.triggered.connect(self._add_images)
        toolbar.addAction(add_action)

        self._aspect_combo = QComboBox()
        for key, (w, h) in ASPECT_RATIO_PRESETS.items():
            self._aspect_combo.addItem(f"{key} ({w}x{h})", key)
        self._aspect_combo.setCurrentIndex(
            max(0, self._aspect_combo.findData(self._settings.aspect_ratio()))
        )
        self._aspect_combo.currentIndexChanged.connect(self._on_aspect_changed)
        toolbar.addWidget(self._aspect_combo)

        self._compose_action = QAction("Co&mpose...", self)
        self._compose_action.setEnabled(self._generation_service is not None)
        self._compose_action.triggered.connect(self._compose)
        toolbar.addAction(self._compose_action)

        export_action = QAction("&Export PNG...", self)
        export_action.setShortcut(QKeySequence("Ctrl+E"))
        export_action.triggered.connect(self._export_png)
        toolbar.addAction(export_action)

        clear_action = QAction("&Clear Canvas", self)
        clear_action.triggered.connect(self._clear_canvas)
        toolbar.addAction(clear_action)

    # --- slots ---

    def _on_aspect_changed(self, index: int) -> None:
        key = self._aspect_combo.itemData(index)
        if isinstance(key, str):
            self._session.set_aspect_ratio(self._aspect_combo.itemText(index))
            self._settings.set_aspect_ratio(key)

    def _add_images(self) -> None:
        patterns = " ".join(f"*{ext}" for ext in sorted(IMAGE_EXTENSIONS))
        paths, _ = QFileDialog.getOpenFileNames(
            self, "Add Images", self._settings.last_import_dir(), f"Images ({patterns})"
        )
        if paths:
            self._settings.set_last_import_dir(str(Path(paths[0]).parent))
            self.add_paths([Path(p) for p in paths])

    def add_paths(self, paths: list[Path]) -> None:
        """Decode and add *paths* as layers; report files that failed."""
        results = self._session.add_paths(paths)
        failed = [r.source.name for r in results if r.error is not None]
        if failed:
            QMessageBox.warning(
                self, "Add Images", "Could not load:\n" + "\n".join(failed)
            )

    def _export_png(self) -> None:
        path_str, _ = QFileDialog.getSaveFileName(
            self, "Export PNG", generate_filename("composition", "png"), "PNG Image (*.png)"
        )
        if not path_str:
            return
        try:
            export_png(self._session, Path(path_str))
        except EmptyCompositionError:
            QMessageBox.information(
                self, "Export PNG", "Add at least one visible image before exporting."
            )

    def _compose(self) -> None:
        prompt, ok = QInputDialog.getText(self, "Compose", "Describe the scene (optional):")
        if ok:
            self.compose([prompt])

    def compose(self, prompts: list[str]) -> GenerationResult | None:
        """Blend the visible layers through the generation service.

        An image reply is placed on the canvas as a new active layer; failures
        are reported and leave the session unchanged.
        """
        if self._generation_service is None:
            return None
        try:
            request = build_composition_request(self._session, prompts)
            result = submit(self._generation_service, request)
        except EmptyCompositionError:
            QMessageBox.information(
                self, "Compose", "Add at least one visible image before composing."
            )
            return None
        except GenerationError as exc:
            QMessageBox.warning(self, "Compose", f"Generation failed: {exc}")
            return None

        if result.image is None:
            QMessageBox.information(self, "Compose", result.text or EMPTY_RESPONSE_TEXT)
            return result
        try:
            image = decode_image(ImageSource("Generated Image", result.image.data))
        except DecodeError as exc:
            QMessageBox.warning(
                self, "Compose", f"Could not read the generated image: {exc.reason}"
            )
            return result
        self._session.add_generated_image(image)
        return result

    def _clear_canvas(self) -> None:
        self._session.clear()
        self._session.set_aspect_ratio(self._aspect_combo.currentText())

    def closeEvent(self, event: QCloseEvent | None) -> None:
        self._settings.save_window_geometry(bytes(self.saveGeometry()))
        super().closeEvent(event)
