"""Pixelation result with run statistics."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from models.image_buffer import ImageBuffer
from models.pixelate_params import ResolvedConfig


@dataclass
class PixelateResult:
    """Output of one pixelation run."""
    
    image: ImageBuffer
    png_bytes: bytes
    config: ResolvedConfig
    
    # Grid
    block_count: int
    grid: Tuple[int, int]
    
    # Quality / compression stats
    psnr: float
    unique_colors: int
    
    # Runtime
    process_time_ms: float
    encode_time_ms: float
    
    output_path: Optional[Path] = None

    @property
    def encoded_size(self) -> int:
        return len(self.png_bytes)
