import os
import sys
from pathlib import Path

import numpy as np
import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

# Ensure the project sources are importable without an editable install.
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

# Render without a display server.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from photocrop.core.raster import RasterImage  # noqa: E402


@pytest.fixture(scope="session")
def qapp():
    from PySide6.QtGui import QGuiApplication

    app = QGuiApplication.instance()
    if app is None:
        app = QGuiApplication([])
    yield app


def gradient_pixels(width: int, height: int) -> np.ndarray:
    """Opaque pixels where every position has a distinct-ish colour."""
    ys, xs = np.mgrid[0:height, 0:width]
    arr = np.empty((height, width, 4), dtype=np.uint8)
    arr[..., 0] = xs % 256
    arr[..., 1] = ys % 256
    arr[..., 2] = (xs * 7 + ys * 13) % 256
    arr[..., 3] = 255
    return arr


@pytest.fixture
def make_raster():
    def _factory(width: int, height: int) -> RasterImage:
        return RasterImage(gradient_pixels(width, height))

    return _factory
