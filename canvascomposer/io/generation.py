"""Generation boundary — assemble requests for an image-generation service.

The service itself is external; this module builds the image and text parts
it receives and turns its reply (or failure) into a :class:`GenerationResult`.
"""

from __future__ import annotations

import logging
import mimetypes
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from PyQt6.QtCore import QSize

from canvascomposer.config.constants import (
    COMPOSITION_MIME_TYPE,
    DEFAULT_GENERATION_PROMPT,
    EMPTY_RESPONSE_TEXT,
    NO_IMAGE_RESPONSE_TEXT,
)
from canvascomposer.core.errors import DecodeError, GenerationError
from canvascomposer.core.render_engine import Compositor
from canvascomposer.io.importer import decode_image

if TYPE_CHECKING:
    from canvascomposer.core.session import EditorSession
    from canvascomposer.io.importer import ImageSource

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImagePart:
    data: bytes
    mime_type: str

    @classmethod
    def from_source(cls, source: ImageSource) -> ImagePart:
        mime, _ = mimetypes.guess_type(source.name)
        return cls(data=source.data, mime_type=mime or COMPOSITION_MIME_TYPE)


@dataclass(frozen=True)
class GenerationRequest:
    """Image parts in order, followed by one text prompt."""

    prompt: str
    images: list[ImagePart] = field(default_factory=list)


@dataclass(frozen=True)
class GenerationResult:
    image: ImagePart | None = None
    text: str | None = None


class GenerationService(ABC):
    """External image-generation backend."""

    @abstractmethod
    def generate(self, request: GenerationRequest) -> GenerationResult:
        """Send *request* and return the raw reply."""


def _join_prompts(prompts: list[str], separator: str) -> str:
    return separator.join(p.strip() for p in prompts if p and p.strip())


def build_composition_request(
    session: EditorSession,
    prompts: list[str],
    references: list[ImageSource] | None = None,
) -> GenerationRequest:
    """Request that blends the current canvas, plus optional references, into one image.

    The flattened canvas is always the first image part.  Raises
    :class:`~canvascomposer.core.errors.EmptyCompositionError` when nothing is
    visible.
    """
    size = session.canvas_size
    canvas = Compositor().flatten(session.layer_manager, size)
    images = [ImagePart(Compositor.encode_png(canvas), COMPOSITION_MIME_TYPE)]
    images.extend(ImagePart.from_source(ref) for ref in references or [])
    instruction = (
        "Combine the visual elements on this canvas into a single, cohesive, and "
        "photorealistic scene with a final resolution of exactly "
        f"{size.width()}x{size.height()} pixels. Seamlessly blend the different "
        "objects and styles, and intelligently fill in all transparent areas to "
        "complete the picture."
    )
    extra = _join_prompts(prompts, ". ")
    prompt = f"{instruction} {extra}" if extra else instruction
    return GenerationRequest(prompt=prompt, images=images)


def build_generation_request(
    prompts: list[str],
    references: list[ImageSource],
    size: QSize,
) -> GenerationRequest:
    """Request for a fresh image of exactly *size*.

    Each reference is normalized onto a transparent canvas of *size*; with no
    references a blank canvas of *size* is sent so the output dimensions are
    unambiguous.
    """
    user_prompt = _join_prompts(prompts, ", ")
    if not user_prompt and not references:
        raise GenerationError("enter a prompt or provide a reference image")

    compositor = Compositor()
    images: list[ImagePart] = []
    for ref in references:
        try:
            normalized = compositor.normalize(decode_image(ref), size)
        except DecodeError as exc:
            raise GenerationError(f"reference image unusable: {exc}") from exc
        images.append(ImagePart(Compositor.encode_png(normalized), COMPOSITION_MIME_TYPE))
    if not images:
        blank = Compositor.blank(size)
        images.append(ImagePart(Compositor.encode_png(blank), COMPOSITION_MIME_TYPE))

    prompt = " ".join(
        [
            user_prompt or DEFAULT_GENERATION_PROMPT,
            "The final image must have a resolution of exactly "
            f"{size.width()}x{size.height()} pixels.",
        ]
    )
    return GenerationRequest(prompt=prompt, images=images)


def submit(service: GenerationService, request: GenerationRequest) -> GenerationResult:
    """Send *request* once and normalise the reply.

    An image reply drops any accompanying text.  Service exceptions are not
    retried; they surface as :class:`GenerationError`.
    """
    log.info("Submitting generation request with %d image part(s)", len(request.images))
    try:
        result = service.generate(request)
    except GenerationError:
        raise
    except Exception as exc:
        log.warning("Generation failed: %s", exc)
        raise GenerationError(str(exc)) from exc

    if result.image is not None:
        return GenerationResult(image=result.image)
    if result.text is not None:
        return GenerationResult(text=result.text.strip() or NO_IMAGE_RESPONSE_TEXT)
    return GenerationResult(text=EMPTY_RESPONSE_TEXT)
