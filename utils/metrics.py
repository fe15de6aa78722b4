"""Metrics: timing, PSNR, color statistics."""

import time
import numpy as np
from skimage.metrics import peak_signal_noise_ratio


def compute_psnr(original: np.ndarray, pixelated: np.ndarray) -> float:
    """PSNR over all RGBA channels; inf when the images are identical."""
    if np.array_equal(original, pixelated):
        return float('inf')
    return float(peak_signal_noise_ratio(original, pixelated, data_range=255))


def count_unique_colors(pixels: np.ndarray) -> int:
    """Number of distinct RGBA values."""
    packed = np.ascontiguousarray(pixels).view(np.uint32).ravel()
    return int(np.unique(packed).size)


class Timer:
    """Simple timer for processing/encoding runtime."""
    
    def __init__(self):
        self.process_time_ms = 0.0
        self.encode_time_ms = 0.0
    
    def measure_process(self, func, *args, **kwargs):
        start = time.perf_counter()
        result = func(*args, **kwargs)
        self.process_time_ms = (time.perf_counter() - start) * 1000.0
        return result
    
    def measure_encode(self, func, *args, **kwargs):
        start = time.perf_counter()
        result = func(*args, **kwargs)
        self.encode_time_ms = (time.perf_counter() - start) * 1000.0
        return result
