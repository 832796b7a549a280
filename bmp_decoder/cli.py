"""Command line interface for the bitmap decoder."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from .builder import PillowImageBuilder
from .decoder import decode_file, read_header
from .errors import BmpError
from .headers import BitmapHeader, Compression
from .options import DEFAULT_OPTIONS, DecodeOptions


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="bmp-decode", description="Decode Microsoft bitmap files")
    parser.add_argument(
        "--options",
        type=Path,
        default=None,
        help="Optional JSON file overriding the default decode options",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    commands = parser.add_subparsers(dest="command", required=True)

    info = commands.add_parser("info", help="Print the header fields of a bitmap")
    info.add_argument("bitmap", type=Path, help="Path to the BMP file")
    info.add_argument("--json", action="store_true", help="Emit the fields as JSON")

    convert = commands.add_parser("convert", help="Decode a bitmap and save it in another format")
    convert.add_argument("bitmap", type=Path, help="Path to the BMP file")
    convert.add_argument(
        "output",
        type=Path,
        help="Destination image; the format follows the file extension (default PNG)",
    )
    return parser


def load_options(path: Path | None) -> DecodeOptions:
    if path is None:
        return DEFAULT_OPTIONS
    return DecodeOptions.from_json(path)


def describe(header: BitmapHeader) -> dict:
    summary = {
        "version": header.version.name,
        "width": header.width,
        "height": header.height,
        "bits_per_pixel": header.bits_per_pixel,
        "compression": header.compression.name,
        "top_down": header.top_down,
        "palette_colors": len(header.palette),
        "file_size": header.file.file_size,
        "data_offset": header.file.data_offset,
    }
    if header.info is not None:
        summary["image_size"] = header.info.image_size
        summary["dpi"] = list(header.info.dpi)
    if header.compression is Compression.BITFIELDS:
        summary["masks"] = {
            "red": f"0x{header.mask.red:08X}",
            "green": f"0x{header.mask.green:08X}",
            "blue": f"0x{header.mask.blue:08X}",
            "alpha": f"0x{header.mask.alpha:08X}",
        }
    if header.extra is not None:
        summary["color_space_type"] = f"0x{header.extra.color_space_type:08X}"
    if header.profile is not None:
        summary["icc_profile_size"] = header.profile.size
    return summary


def _run_info(args: argparse.Namespace, options: DecodeOptions) -> None:
    with args.bitmap.open("rb") as fh:
        header = read_header(fh, options)
    summary = describe(header)
    if args.json:
        print(json.dumps(summary, indent=2))
        return
    for key, value in summary.items():
        print(f"{key}: {value}")


def _run_convert(args: argparse.Namespace, options: DecodeOptions) -> None:
    image = decode_file(args.bitmap, PillowImageBuilder(), options)
    output = Path(args.output)
    output.parent.mkdir(parents=True, exist_ok=True)
    image.save(output, format=None if output.suffix else "PNG")


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        options = load_options(args.options)
    except (ValueError, TypeError) as exc:
        print(f"error: invalid options file {args.options}: {exc}", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    try:
        if args.command == "info":
            _run_info(args, options)
        else:
            _run_convert(args, options)
    except (BmpError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
