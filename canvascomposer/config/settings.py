"""Persistent application settings backed by QSettings."""

from PyQt6.QtCore import QByteArray, QSettings

from canvascomposer.config.constants import (
    APP_NAME,
    ASPECT_RATIO_PRESETS,
    DEFAULT_ASPECT_RATIO,
    ORG_NAME,
)


class AppSettings:
    """Thin wrapper around QSettings for typed access to application preferences."""

    def __init__(self, qsettings: QSettings | None = None) -> None:
        self._qs = qsettings if qsettings is not None else QSettings(ORG_NAME, APP_NAME)

    # --- window geometry ---

    def save_window_geometry(self, geometry: bytes) -> None:
        self._qs.setValue("window/geometry", geometry)

    def window_geometry(self) -> bytes | None:
        val = self._qs.value("window/geometry")
        if isinstance(val, QByteArray):
            return bytes(val)
        if isinstance(val, bytes):
            return val
        return None

    # --- canvas ---

    def aspect_ratio(self) -> str:
        val = str(self._qs.value("canvas/aspectRatio", DEFAULT_ASPECT_RATIO))
        if val not in ASPECT_RATIO_PRESETS:
            return DEFAULT_ASPECT_RATIO
        return val

    def set_aspect_ratio(self, key: str) -> None:
        self._qs.setValue("canvas/aspectRatio", key)

    # --- import ---

    def last_import_dir(self) -> str:
        return str(self._qs.value("files/lastImportDir", ""))

    def set_last_import_dir(self, path: str) -> None:
        self._qs.setValue("files/lastImportDir", path)
