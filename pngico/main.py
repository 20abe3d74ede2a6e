"""Точка входа: `pngico -i input.png -o output.ico`."""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from pngico.controllers.cli_controller import CliController
from pngico.errors import PngIcoError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pngico",
        description="Convert an image into a single-image ICO file with an embedded PNG",
    )
    parser.add_argument("-i", "--input", default="", metavar="<file>", help="input image file")
    parser.add_argument("-o", "--output", default="", metavar="<file>", help="output ico file")
    parser.add_argument("--inspect", metavar="<file>", help="print the directory of an existing ico file and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Разбирает аргументы, запускает конвертацию и возвращает код выхода."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    controller = CliController()

    if args.inspect:
        try:
            info = controller.inspect(args.inspect)
        except PngIcoError as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 1
        e = info.entry
        print(f"type={info.header.image_type} count={info.header.count}")
        print(
            f"width={e.width} height={e.height} planes={e.color_planes} bpp={e.bits_per_pixel} "
            f"size={e.size_in_bytes} offset={e.offset}"
        )
        return 0

    if not args.input or not args.output:
        parser.print_usage(sys.stderr)
        print("error: please provide an input and output file", file=sys.stderr)
        return 2

    try:
        controller.run(args.input, args.output)
    except PngIcoError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
