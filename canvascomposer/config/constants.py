"""Application-wide constants."""

APP_NAME = "Canvas Composer"
APP_VERSION = "0.1.0"
ORG_NAME = "CanvasComposer"
ORG_DOMAIN = "canvascomposer.org"

# Canvas defaults (the 1:1 preset)
DEFAULT_ASPECT_RATIO = "1:1"
DEFAULT_CANVAS_WIDTH = 1024
DEFAULT_CANVAS_HEIGHT = 1024

# Aspect-ratio menu: key -> logical (width, height)
ASPECT_RATIO_PRESETS: dict[str, tuple[int, int]] = {
    "1:1": (1024, 1024),
    "16:9": (1344, 738),
    "9:16": (738, 1344),
    "4:3": (1024, 768),
    "3:4": (768, 1024),
}

# Largest on-screen width of the canvas surface
MAX_CANVAS_DISPLAY_WIDTH = 680

# Resize handles (logical pixels)
HANDLE_SIZE = 16
HANDLE_HIT_SCALE = 1.5
HANDLE_COLOR = "#4f46e5"
HANDLE_STROKE = "#ffffff"
HANDLE_STROKE_WIDTH = 3

# A resize frame is committed only if both sides exceed this
MIN_LAYER_SIZE = 20

# Offset applied to duplicated layers
DUPLICATE_OFFSET = 20

# Per-image offset when several images are added in one batch
BATCH_STAGGER = 20

# Image decode fan-out
DECODE_WORKERS = 4
IMAGE_EXTENSIONS = {".png", ".jpg", ".jpeg", ".bmp", ".gif", ".webp"}

# Generation boundary
COMPOSITION_MIME_TYPE = "image/png"
DEFAULT_GENERATION_PROMPT = "A beautiful image based on the provided visual references."
EMPTY_RESPONSE_TEXT = "The model returned an empty response. Please try again."
NO_IMAGE_RESPONSE_TEXT = "The model didn't return an image. Please try adjusting your prompt."

# Canvas widget
CANVAS_BACKGROUND_COLOR = "#505050"
CHECKERBOARD_CELL_SIZE = 8
CHECKERBOARD_COLOR_A = "#FFFFFF"
CHECKERBOARD_COLOR_B = "#CCCCCC"
EMPTY_CANVAS_TEXT = "Add images to start composing"
EMPTY_CANVAS_TEXT_COLOR = "#AAAAAA"
HIDDEN_LAYER_TEXT_COLOR = "#999999"
