import argparse
import sys
from pathlib import Path

from loguru import logger

from asciigrid.charsets import DEFAULT, PRESETS
from asciigrid.colours import COLOURS, resolve_colour
from asciigrid.config import DEFAULT_BIND, ServerConfig
from asciigrid.converter import convert
from asciigrid.errors import AsciiGridError, ConfigurationError, error_message
from asciigrid.palette import check_palette, split_palette
from asciigrid.sampling import check_cell_size
from asciigrid.sources import open_source


def build_parser() -> argparse.ArgumentParser:
    colour_names = "|".join(COLOURS)
    parser = argparse.ArgumentParser(description="Render an image as ASCII art")
    parser.add_argument("--server", action="store_true", default=False, help="Run the web UI server")
    parser.add_argument("--ip", default=DEFAULT_BIND, help=f"Address to bind the server to (default: {DEFAULT_BIND})")
    parser.add_argument("--image-path", default="", help="Path of the picture file (png/jpg/gif)")
    parser.add_argument("--image-url", default="", help="URL of the picture file (png/jpg/gif)")
    parser.add_argument(
        "--characters", default=DEFAULT, help=f"Characters to draw with, densest first (default: {DEFAULT!r})"
    )
    parser.add_argument(
        "--preset", choices=sorted(PRESETS), default=None, help="Use a built-in character set instead of --characters"
    )
    parser.add_argument("--sub-width", type=int, default=10, help="Width of one cell in pixels (default: 10)")
    parser.add_argument("--sub-height", type=int, default=10, help="Height of one cell in pixels (default: 10)")
    parser.add_argument("--image-out", action="store_true", default=False, help="Also render the ASCII art as a PNG")
    parser.add_argument("--image-out-path", default="", help="Where to write the PNG when --image-out is set")
    parser.add_argument("--bg", default="black", help=f"Background colour of the PNG ({colour_names})")
    parser.add_argument("--color", default="gray", help=f"Character colour of the PNG ({colour_names})")
    parser.add_argument("-v", "--verbose", action="store_true", default=False, help="Log debug output to stderr")
    return parser


def setup_logging(verbose: bool) -> None:
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "WARNING")


def run(args: argparse.Namespace) -> str:
    """Convert according to parsed arguments, writing the PNG if asked. Returns the ASCII art."""
    if args.image_out and not args.image_out_path:
        raise ConfigurationError("--image-out-path is required with --image-out")
    characters = PRESETS[args.preset] if args.preset else args.characters
    palette = split_palette(characters)
    # Reject bad options before touching the disk or network
    check_palette(palette)
    check_cell_size(args.sub_width, args.sub_height)
    source = open_source(path=args.image_path, url=args.image_url)
    result = convert(
        source,
        palette,
        args.sub_width,
        args.sub_height,
        want_image=args.image_out,
        background=resolve_colour(args.bg),
        ink=resolve_colour(args.color),
    )
    if result.image is not None:
        out_path = Path(args.image_out_path)
        result.image.save(out_path, format="PNG")
        logger.info("Wrote {}", out_path)
    return result.ascii


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    try:
        if args.server:
            from asciigrid.server import serve

            serve(ServerConfig.from_env(args.ip))
            return
        print(run(args), end="")
    except AsciiGridError as e:
        print(error_message(e), file=sys.stderr)
        sys.exit(1)
