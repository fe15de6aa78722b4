"""
Pixelator
Block-based pixelation with PNG/DPI output
"""

import argparse
import logging
import sys
from pathlib import Path

from models.errors import (
    PixelatorError,
    InvalidConfigError,
    DecodeError,
    ProcessingError,
    EncodeError,
)
from utils.constants import DEFAULT_DPI
from utils.test_images import DEMO_IMAGES

EXIT_CODES = {
    InvalidConfigError: 2,
    DecodeError: 3,
    ProcessingError: 4,
    EncodeError: 5,
}


def default_output_path(input_path) -> Path:
    """<stem>_lowres.png next to the input file."""
    path = Path(input_path)
    return path.parent / f"{path.stem}_lowres.png"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pixelator",
        description="Pixelate an image into uniform blocks and save it as PNG.",
    )
    parser.add_argument("input", nargs="?", help="Input image (PNG, JPEG, WEBP, GIF, ...)")
    parser.add_argument("output", nargs="?",
                        help="Output PNG path (default: <input stem>_lowres.png beside INPUT)")
    parser.add_argument("--synthetic", metavar="KIND", choices=DEMO_IMAGES,
                        help=f"Use a generated image instead of INPUT ({', '.join(DEMO_IMAGES)})")
    parser.add_argument("--block", type=int, help="Block size in pixels (1-500)")
    parser.add_argument("--mode", default=None, help="Auto or Manual (default: Auto)")
    parser.add_argument("--filter", default=None,
                        help="Up-sampling filter: Nearest, Triangle, Gaussian, CatmullRom or Lanczos3")
    parser.add_argument("--down-filter", dest="pixel_down_filter", default=None,
                        help="Down-sampling filter: Box, Nearest, Triangle, Gaussian, CatmullRom or Lanczos3")
    parser.add_argument("--dpi", type=int, default=None, help=f"Output DPI (default: {DEFAULT_DPI})")
    parser.add_argument("--workers", type=int, default=None, help="Worker threads (default: CPU count)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def run(argv=None) -> int:
    from models.pixelate_params import PixelateParams
    from engines.pipeline import pixelate, pixelate_file
    from engines.encoder import write_atomic
    from utils.test_images import generate_demo_image

    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    params = PixelateParams(
        block=args.block,
        dpi=args.dpi,
        mode=args.mode,
        filter=args.filter,
        pixel_down_filter=args.pixel_down_filter,
    )

    try:
        if args.synthetic:
            # a single positional names the output when there is no input file
            output = args.output or args.input or f"{args.synthetic}_lowres.png"
            print(f"Generating test image: {args.synthetic}")
            image = generate_demo_image(args.synthetic)
            result = pixelate(image, params, workers=args.workers)
            result.output_path = write_atomic(output, result.png_bytes)
        elif args.input:
            output = args.output or default_output_path(args.input)
            print(f"Loading: {args.input}")
            result = pixelate_file(args.input, output, params, workers=args.workers)
        else:
            print("error: INPUT or --synthetic is required", file=sys.stderr)
            return 1
    except PixelatorError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_CODES.get(type(e), 1)

    config = result.config
    w, h = result.image.size
    print(f"Image:     {w}x{h}")
    print(f"Block:     {config.block_size}px ({config.sizing_mode.value}), "
          f"{result.grid[0]}x{result.grid[1]} grid, {result.block_count} blocks")
    print(f"Filters:   down={config.down_filter.value} up={config.up_filter.value}")
    print(f"DPI:       {config.dpi}")
    print(f"Colors:    {result.unique_colors}")
    print(f"PSNR:      {result.psnr:.2f} dB")
    print(f"PNG size:  {result.encoded_size} bytes")
    print(f"Time:      {result.process_time_ms + result.encode_time_ms:.2f} ms")
    print(f"\nSaved: {result.output_path}")
    return 0


def main():
    sys.exit(run())


if __name__ == '__main__':
    main()
