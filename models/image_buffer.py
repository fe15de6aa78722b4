"""Owned RGBA8 pixel store."""

from dataclasses import dataclass
import numpy as np

CHANNELS = 4


@dataclass
class ImageBuffer:
    """Decoded image as a contiguous (height, width, 4) uint8 array."""

    width: int
    height: int
    pixels: np.ndarray

    def __post_init__(self):
        if self.pixels.dtype != np.uint8:
            raise ValueError(f"Pixels must be uint8, got {self.pixels.dtype}")
        if self.pixels.shape != (self.height, self.width, CHANNELS):
            raise ValueError(
                f"Pixel shape {self.pixels.shape} does not match "
                f"{self.width}x{self.height}x{CHANNELS}"
            )
        if not self.pixels.flags['C_CONTIGUOUS']:
            self.pixels = np.ascontiguousarray(self.pixels)

    @property
    def size(self) -> tuple:
        return (self.width, self.height)

    @classmethod
    def blank(cls, width: int, height: int) -> "ImageBuffer":
        """Zeroed buffer, used as the destination of a run."""
        return cls(width, height, np.zeros((height, width, CHANNELS), dtype=np.uint8))

    @classmethod
    def from_array(cls, array: np.ndarray) -> "ImageBuffer":
        """Normalize grey, grey+alpha, RGB or RGBA arrays (uint8/uint16) to RGBA8."""
        if array.dtype == np.uint16:
            array = (array >> 8).astype(np.uint8)
        elif array.dtype != np.uint8:
            raise ValueError(f"Unsupported pixel type {array.dtype}")

        if array.ndim == 2:
            array = array[:, :, np.newaxis]
        if array.ndim != 3:
            raise ValueError(f"Unsupported array shape {array.shape}")

        h, w, c = array.shape
        if c == 1:
            rgb = np.repeat(array, 3, axis=2)
            alpha = np.full((h, w, 1), 255, dtype=np.uint8)
        elif c == 2:
            rgb = np.repeat(array[:, :, :1], 3, axis=2)
            alpha = array[:, :, 1:2]
        elif c == 3:
            rgb = array
            alpha = np.full((h, w, 1), 255, dtype=np.uint8)
        elif c == 4:
            return cls(w, h, np.ascontiguousarray(array))
        else:
            raise ValueError(f"Unsupported channel count {c}")

        return cls(w, h, np.ascontiguousarray(np.concatenate([rgb, alpha], axis=2)))
