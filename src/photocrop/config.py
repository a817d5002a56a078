"""Default configuration values for photocrop."""

from __future__ import annotations

from typing import Final

# Images whose natural width or height falls below this threshold are flagged
# as "small".  The controller starts such images magnified so that the crop
# handles remain usable.
SMALL_IMAGE_THRESHOLD_PX: Final[int] = 300
SMALL_IMAGE_INITIAL_ZOOM: Final[float] = 2.0

MIN_ZOOM: Final[float] = 1.0
MAX_ZOOM: Final[float] = 3.0
DEFAULT_ZOOM: Final[float] = 1.0
ZOOM_WHEEL_STEP: Final[float] = 0.1

ROTATION_STEP_DEGREES: Final[float] = 90.0
ROTATION_SLIDER_RANGE: Final[tuple[float, float]] = (0.0, 360.0)

# ``None`` selects the source image's natural ratio.
ASPECT_PRESETS: Final[list[tuple[str, tuple[int, int] | None]]] = [
    ("Original", None),
    ("1:1", (1, 1)),
    ("4:3", (4, 3)),
    ("16:9", (16, 9)),
]

# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------

OUTPUT_FORMAT: Final[str] = "PNG"
OUTPUT_MIME_TYPE: Final[str] = "image/png"
DEFAULT_DOWNLOAD_NAME: Final[str] = "profile-image.png"

# Upper bound for either side of an encoded image.  A 16k square RGBA buffer is
# already 1 GiB, anything larger is rejected rather than truncated.
MAX_OUTPUT_DIMENSION: Final[int] = 16384
