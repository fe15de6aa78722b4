"""Engine-wide constants and default values."""

# Block size limits (pixels per side)
MIN_BLOCK_SIZE = 1
MAX_BLOCK_SIZE = 500

# Auto mode aims for this many blocks along the longer image side
AUTO_TARGET_BLOCKS = 64

# Output metadata
DEFAULT_DPI = 300
# pHYs holds pixels per meter in 31 bits
MAX_DPI = 54_544_379
METERS_PER_INCH = 0.0254

# zlib level for PNG output (0-9)
DEFAULT_COMPRESS_LEVEL = 6

DEFAULT_SIZING_MODE = 'auto'
DEFAULT_DOWN_FILTER = 'box'
DEFAULT_UP_FILTER = 'nearest'
