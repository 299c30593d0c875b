"""Image builders and fake providers shared by the test-suite."""
from __future__ import annotations

import io
import struct
import zlib
from typing import Optional, Sequence

from PIL import Image

from spriteforge.models import VideoJob, VideoOptions
from spriteforge.services.errors import TransportError
from spriteforge.services.imagegen import ImagePart, ImageProvider, ProviderImage
from spriteforge.services.video import VideoProvider

CLEAR = (0, 0, 0, 0)
RED = (255, 0, 0, 255)
BLUE = (0, 0, 255, 255)


def make_image(size, fill=CLEAR) -> Image.Image:
    return Image.new("RGBA", size, fill)


def to_png(image: Image.Image, fmt: str = "PNG") -> bytes:
    buffer = io.BytesIO()
    image.save(buffer, format=fmt)
    return buffer.getvalue()


def make_png(size, fill=CLEAR) -> bytes:
    return to_png(make_image(size, fill))


def sprite_png(size, box, color=RED) -> bytes:
    """Transparent canvas with an opaque rectangle at ``box`` (left, top, right, bottom inclusive)."""
    img = make_image(size)
    left, top, right, bottom = box
    for y in range(top, bottom + 1):
        for x in range(left, right + 1):
            img.putpixel((x, y), color)
    return to_png(img)


def _png_chunk(kind: bytes, body: bytes) -> bytes:
    return struct.pack(">I", len(body)) + kind + body + struct.pack(">I", zlib.crc32(kind + body))


def oversized_png(width: int, height: int) -> bytes:
    """A tiny PNG whose header declares ``width`` x ``height`` RGBA pixels."""

    header = struct.pack(">IIBBBBB", width, height, 8, 6, 0, 0, 0)
    return (
        b"\x89PNG\r\n\x1a\n"
        + _png_chunk(b"IHDR", header)
        + _png_chunk(b"IDAT", zlib.compress(b"\x00"))
        + _png_chunk(b"IEND", b"")
    )


def open_png(data: bytes) -> Image.Image:
    img = Image.open(io.BytesIO(data))
    img.load()
    return img.convert("RGBA")


class FakeImageProvider(ImageProvider):
    """Returns queued responses in order and records every call."""

    name = "fake"
    model = "fake-image-model"

    def __init__(self, responses: Sequence[bytes | Exception]) -> None:
        self._responses = list(responses)
        self.calls: list[tuple[list[ImagePart], str, Optional[float]]] = []

    def generate(self, images, prompt, *, temperature=None) -> ProviderImage:
        self.calls.append((list(images), prompt, temperature))
        if not self._responses:
            raise AssertionError("provider called more times than expected")
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return ProviderImage(image_bytes=response)


class FakeVideoProvider(VideoProvider):
    name = "fake"
    model = "fake-video-model"

    def __init__(self, *, polls_until_done: int = 2, error: str | None = None, video: bytes = b"mp4-bytes") -> None:
        self._remaining = polls_until_done
        self._error = error
        self._video = video
        self.started: list[tuple[ImagePart, str, VideoOptions, Optional[ImagePart]]] = []
        self.refreshes = 0

    def start(self, image, prompt, options, *, last_frame=None) -> VideoJob:
        self.started.append((image, prompt, options, last_frame))
        return VideoJob(name=f"op-{len(self.started)}", done=self._remaining == 0)

    def refresh(self, job: VideoJob) -> VideoJob:
        self.refreshes += 1
        self._remaining -= 1
        done = self._remaining <= 0
        return VideoJob(name=job.name, done=done, error=self._error if done else None)

    def download(self, job: VideoJob) -> bytes:
        if not job.done:
            raise TransportError("not finished")
        return self._video
