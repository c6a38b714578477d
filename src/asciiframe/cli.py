import argparse
import logging
import sys
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from asciiframe.charmaps import PRESETS, Lookup, char_map_from_name
from asciiframe.converter import image_to_ascii
from asciiframe.errors import PipelineError
from asciiframe.terminal import fit_resolution, get_terminal_size

logger = logging.getLogger(__name__)


def setup_logging(verbosity: int) -> None:
    level = {0: logging.WARNING, 1: logging.INFO}.get(verbosity, logging.DEBUG)
    logging.basicConfig(level=level, format="%(asctime)s [%(levelname)s] %(message)s")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Render an image as text art")
    parser.add_argument("image", help="Path to input image")
    parser.add_argument("-W", "--width", type=int, default=None, help="Output width in columns (default: fit terminal)")
    parser.add_argument("-H", "--height", type=int, default=None, help="Output height in rows (default: fit terminal)")
    charset = parser.add_mutually_exclusive_group()
    charset.add_argument(
        "-m", "--char-map", default="chars1", choices=sorted(PRESETS), help="Character map to use (default: chars1)"
    )
    charset.add_argument("--chars", default=None, help="Custom character ramp, ordered from sparse to dense")
    parser.add_argument("-c", "--colour", action="store_true", default=False, help="Enable truecolor ANSI output")
    parser.add_argument(
        "--no-newlines", dest="new_lines", action="store_false", default=True, help="Do not break lines between rows"
    )
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity")
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    image_path = Path(args.image)
    if not image_path.exists():
        print(f"File not found: {image_path}", file=sys.stderr)
        return 1

    try:
        char_map = Lookup(args.chars) if args.chars is not None else char_map_from_name(args.char_map)
        with Image.open(image_path) as image:
            width, height = args.width, args.height
            if width is not None and height is None:
                width, height = fit_resolution(image.size, width)
            elif width is None:
                columns, rows = get_terminal_size()
                if height is None:
                    # Leave a row for the shell prompt
                    height = max(1, rows - 1)
                width, height = fit_resolution(image.size, columns, height)
            logger.info("Rendering %s at %dx%d", image_path, width, height)
            print(image_to_ascii(image, char_map, width, height, colour=args.colour, new_lines=args.new_lines))
    except UnidentifiedImageError as err:
        logger.error("Cannot read image: %s", err)
        return 1
    except (PipelineError, ValueError) as err:
        logger.error("%s", err)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
