"""Error taxonomy for the pixelation engine."""


class PixelatorError(Exception):
    """Base class for all engine errors."""

    kind = "Error"

    def __str__(self) -> str:
        message = super().__str__()
        return f"{self.kind}: {message}" if message else self.kind


class InvalidConfigError(PixelatorError):
    """Block size, mode, filter or DPI could not be resolved."""

    kind = "InvalidConfig"


class DecodeError(PixelatorError):
    """Input bytes are not a supported image."""

    kind = "Decode"


class ProcessingError(PixelatorError):
    """A worker failed while dispatching blocks."""

    kind = "Processing"


class EncodeError(PixelatorError):
    """PNG serialization or the output write failed."""

    kind = "Encode"
