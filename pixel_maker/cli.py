"""Command-line interface for pixel_maker.

Headless conversion with optional JSON output for scripting.
"""

from __future__ import annotations

import argparse
import json
import sys
import traceback
from pathlib import Path

from pixel_maker.core.palette import PALETTES, PaletteName


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pixel-maker",
        description="Convert images to palette-quantized pixel art.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # --- convert subcommand ---
    convert = subparsers.add_parser(
        "convert",
        help="Convert an image to pixel art.",
    )
    convert.add_argument("input", help="Input image file path.")
    convert.add_argument(
        "-o", "--output",
        help="Output file path. Defaults to <input>_pixelated.<ext>.",
    )
    convert.add_argument(
        "--block-size",
        type=int,
        default=5,
        help="Side length of each block in source pixels (default: 5).",
    )
    convert.add_argument(
        "--dither",
        type=float,
        default=0.0,
        help="Dither threshold, usually 0.0 to 1.0 (default: 0.0 = off).",
    )
    convert.add_argument(
        "--palette",
        choices=[p.value for p in PaletteName],
        default="eight_bit",
        help="Palette preset (default: eight_bit).",
    )
    convert.add_argument(
        "--fit",
        metavar="WxH",
        help="Scale the source to fit this box before converting.",
    )
    convert.add_argument(
        "--seed",
        type=int,
        help="Seed for the dither noise, for reproducible output.",
    )
    convert.add_argument(
        "--json",
        action="store_true",
        help="Output structured JSON (pipe-friendly).",
    )
    convert.add_argument(
        "--debug",
        action="store_true",
        help="Show stack traces on error.",
    )

    # --- palettes subcommand ---
    palettes = subparsers.add_parser(
        "palettes",
        help="List available palette presets.",
    )
    palettes.add_argument(
        "--json",
        action="store_true",
        help="Output structured JSON.",
    )

    return parser


def _auto_output_path(input_path: Path) -> Path:
    """Generate default output path from input."""
    return input_path.parent / f"{input_path.stem}_pixelated{input_path.suffix}"


def _json_error(message: str, code: str) -> None:
    """Print JSON error to stderr and exit with code 1."""
    err = {"status": "error", "error": message, "code": code}
    print(json.dumps(err), file=sys.stderr)
    sys.exit(1)


def _fail(args: argparse.Namespace, message: str, code: str) -> None:
    if args.debug and sys.exc_info()[0] is not None:
        traceback.print_exc(file=sys.stderr)
    if args.json:
        _json_error(message, code)
    print(f"Error: {message}", file=sys.stderr)
    sys.exit(1)


def _run_convert(args: argparse.Namespace) -> None:
    """Run the headless convert pipeline."""
    import numpy as np

    from pixel_maker.core.processor import Settings, pixelate
    from pixel_maker.core.reader import load_image
    from pixel_maker.core.surface import Surface
    from pixel_maker.core.writer import save_image
    from pixel_maker.utils.sizing import fit_image, parse_box

    is_json = args.json
    input_path = Path(args.input).resolve()

    try:
        settings = Settings(
            block_size=args.block_size,
            dither=args.dither,
            palette=PaletteName(args.palette),
        )
        box = parse_box(args.fit) if args.fit else None
    except ValueError as e:
        _fail(args, str(e), "INVALID_SETTINGS")

    if args.output:
        output_path = Path(args.output).resolve()
    else:
        output_path = _auto_output_path(input_path)

    try:
        source = load_image(input_path)
    except FileNotFoundError as e:
        _fail(args, str(e), "FILE_NOT_FOUND")
    except (ValueError, OSError) as e:
        _fail(args, str(e), "INVALID_INPUT")

    input_size = (source.width, source.height)
    if box is not None:
        source = Surface.from_image(fit_image(source.to_image(), *box))

    if source.width < settings.block_size or source.height < settings.block_size:
        _fail(
            args,
            f"Image {source.width}x{source.height} is smaller than one "
            f"{settings.block_size}px block",
            "INVALID_SETTINGS",
        )

    def report(done: int, total: int) -> None:
        if not is_json and (done == total or done % 100 == 0):
            print(f"\rProcessing block {done}/{total}...", end="", file=sys.stderr)

    try:
        result = pixelate(
            source,
            settings,
            rng=np.random.default_rng(args.seed),
            on_progress=report,
        )
        save_image(result, output_path)
    except Exception as e:
        if args.debug:
            traceback.print_exc(file=sys.stderr)
        if is_json:
            _json_error(str(e), "PROCESSING_ERROR")
        else:
            print(f"\nError during processing: {e}", file=sys.stderr)
            sys.exit(1)

    if not is_json:
        print(f"\nSaved to {output_path}", file=sys.stderr)
    else:
        result_info = {
            "status": "success",
            "input": str(input_path),
            "output": str(output_path),
            "settings": {
                "block_size": settings.block_size,
                "dither": settings.dither,
                "palette": settings.palette.value,
                "seed": args.seed,
            },
            "metadata": {
                "input_size": list(input_size),
                "source_size": [source.width, source.height],
                "output_size": [result.width, result.height],
                "blocks": (result.width // settings.block_size)
                * (result.height // settings.block_size),
            },
        }
        print(json.dumps(result_info, indent=2))


def _run_palettes(args: argparse.Namespace) -> None:
    """List palette presets."""
    if args.json:
        listing = {
            name.value: [list(c) for c in palette.colors]
            for name, palette in PALETTES.items()
        }
        print(json.dumps(listing, indent=2))
        return
    for name, palette in PALETTES.items():
        print(f"{name.value:<10} {len(palette)} colors")


def main(argv: list[str] | None = None) -> None:
    """Main entry point.

    Routing:
      pixel-maker convert <file> [opts]  → convert subcommand
      pixel-maker palettes               → list palette presets
      pixel-maker                        → help
    """
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.command == "convert":
        _run_convert(args)
    elif args.command == "palettes":
        _run_palettes(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
