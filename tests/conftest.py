from __future__ import annotations

import io
import struct
from typing import Callable, List, Tuple

import numpy as np
import pytest
from PIL import Image

from pngico.services.icon_service import IconService
from pngico.services.image_service import ImageService


@pytest.fixture
def icon_service() -> IconService:
    return IconService()


@pytest.fixture
def image_service() -> ImageService:
    return ImageService()


@pytest.fixture
def solid_image() -> Callable[..., Image.Image]:
    def make(width: int, height: int, color: Tuple[int, int, int, int] = (255, 0, 0, 255)) -> Image.Image:
        return Image.new("RGBA", (width, height), color)
    return make


@pytest.fixture
def gradient_image() -> Image.Image:
    """24x17 RGBA with varying color and alpha, so pixel checks are meaningful."""
    h, w = 17, 24
    ys, xs = np.mgrid[0:h, 0:w]
    arr = np.stack(
        [xs * 10 % 256, ys * 15 % 256, (xs + ys) * 5 % 256, (xs * ys) % 256],
        axis=-1,
    ).astype(np.uint8)
    return Image.fromarray(arr)


@pytest.fixture
def png_bytes() -> Callable[[Image.Image], bytes]:
    def encode(image: Image.Image) -> bytes:
        buffer = io.BytesIO()
        image.save(buffer, format="PNG")
        return buffer.getvalue()
    return encode


def unpack_icon(data: bytes):
    """(header triple, entry tuple, resource) straight from the byte layout."""
    header = struct.unpack_from("<HHH", data, 0)
    entry = struct.unpack_from("<BBBBHHII", data, 6)
    return header, entry, data[22:]


class RecordingSink:
    def __init__(self) -> None:
        self.writes: List[bytes] = []

    def write(self, data: bytes) -> int:
        self.writes.append(bytes(data))
        return len(data)


class ShortWriteSink(RecordingSink):
    """Accepts every byte but the last one on the given call."""

    def __init__(self, short_on: int = 0) -> None:
        super().__init__()
        self.short_on = short_on

    def write(self, data: bytes) -> int:
        call = len(self.writes)
        self.writes.append(bytes(data))
        if call == self.short_on:
            return len(data) - 1
        return len(data)


class FailingSink(RecordingSink):
    def write(self, data: bytes) -> int:
        raise OSError(28, "No space left on device")
