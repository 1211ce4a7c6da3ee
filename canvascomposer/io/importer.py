"""Importer — decode image files into bitmaps ready to become layers."""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor, wait
from dataclasses import dataclass
from pathlib import Path

from PyQt6.QtGui import QImage

from canvascomposer.config.constants import DECODE_WORKERS
from canvascomposer.core.errors import DecodeError

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImageSource:
    """An already-obtained image file: a display name plus its encoded bytes."""

    name: str
    data: bytes

    @classmethod
    def from_path(cls, path: Path) -> ImageSource:
        """Read *path*, raising :class:`DecodeError` if the file cannot be read."""
        try:
            data = path.read_bytes()
        except OSError as exc:
            raise DecodeError(path.name, exc.strerror or str(exc)) from exc
        return cls(name=path.name, data=data)


@dataclass(frozen=True)
class DecodeResult:
    """Outcome of decoding one :class:`ImageSource`: an image or an error."""

    source: ImageSource
    image: QImage | None = None
    error: DecodeError | None = None

    @property
    def ok(self) -> bool:
        return self.image is not None


def decode_image(source: ImageSource) -> QImage:
    """Decode *source* into a QImage, raising :class:`DecodeError` on failure."""
    image = QImage()
    if not source.data or not image.loadFromData(source.data):
        raise DecodeError(source.name, "unsupported or corrupt image data")
    if image.width() <= 0 or image.height() <= 0:
        raise DecodeError(source.name, "image has no pixels")
    return image


def decode_async(source: ImageSource, executor: ThreadPoolExecutor) -> Future[QImage]:
    """Schedule a decode on *executor* and return its future."""
    return executor.submit(decode_image, source)


def decode_batch(
    sources: list[ImageSource], max_workers: int = DECODE_WORKERS
) -> list[DecodeResult]:
    """Decode all *sources* concurrently and wait for every one to finish.

    Results come back in the order of *sources*.  A failed decode is reported
    in its own result and does not affect its siblings.
    """
    if not sources:
        return []
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = [decode_async(source, executor) for source in sources]
        wait(futures)

    results: list[DecodeResult] = []
    for source, future in zip(sources, futures):
        exc = future.exception()
        if exc is None:
            results.append(DecodeResult(source=source, image=future.result()))
        elif isinstance(exc, DecodeError):
            log.warning("Failed to decode %s: %s", source.name, exc.reason)
            results.append(DecodeResult(source=source, error=exc))
        else:
            raise exc
    return results


def decode_paths(paths: list[Path], max_workers: int = DECODE_WORKERS) -> list[DecodeResult]:
    """Read and decode *paths*; unreadable files become failed results in place."""
    read: list[DecodeResult | ImageSource] = []
    for path in paths:
        try:
            read.append(ImageSource.from_path(path))
        except DecodeError as exc:
            log.warning("Failed to read %s: %s", path, exc.reason)
            read.append(DecodeResult(source=ImageSource(path.name, b""), error=exc))

    decoded = iter(
        decode_batch([s for s in read if isinstance(s, ImageSource)], max_workers)
    )
    return [next(decoded) if isinstance(item, ImageSource) else item for item in read]
