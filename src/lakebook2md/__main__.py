"""Command-line entry point: ``python -m lakebook2md``."""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from lakebook2md.config import LAKEBOOK2MD_DOWNLOAD_IMAGES
from lakebook2md.exceptions import InputError, Lakebook2mdError
from lakebook2md.ingestion import ConversionOptions, convert_lakebook
from lakebook2md.remote import convert_remote_page, remote_file_stem
from lakebook2md.utils.logging_config import configure_logging, get_logger

logger = get_logger(__name__)

DEFAULT_OUTPUT = "markdown-output.zip"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lakebook2md",
        description="Convert a .lakebook export (or a public document page) to Markdown.",
    )
    parser.add_argument("input", nargs="?", help="Path to a .lakebook file")
    parser.add_argument("--url", help="Public document or knowledge-base page to convert instead")
    parser.add_argument(
        "-o",
        "--output",
        help=(
            f"Output path (default: {DEFAULT_OUTPUT}). For a single-document URL, "
            "a .md path or '-' writes plain Markdown."
        ),
    )
    parser.add_argument(
        "--download-images",
        action="store_true",
        default=LAKEBOOK2MD_DOWNLOAD_IMAGES,
        help="Download images into attachments/ folders and relink them",
    )
    parser.add_argument("--log-level", default=None, help="Logging level (default: INFO)")
    return parser


async def run(args: argparse.Namespace) -> int:
    options = ConversionOptions(download_images=args.download_images)

    if args.url:
        conversion = await convert_remote_page(args.url, options)
        output = args.output
        single_markdown = not conversion.is_book and not conversion.result.attachment_count
        if single_markdown and (output == "-" or (output and output.endswith(".md"))):
            _write_text(output, conversion.markdown)
            return 0
        if single_markdown and output is None:
            output = f"{remote_file_stem(conversion)}.md"
            _write_text(output, conversion.markdown)
            return 0
        _write_bytes(output or DEFAULT_OUTPUT, conversion.result.to_zip())
        return 0

    if not args.input:
        raise InputError("Provide a .lakebook file or --url")

    input_path = Path(args.input)
    if not input_path.is_file():
        raise InputError(f"Input file not found: {input_path}")

    result = await convert_lakebook(input_path.read_bytes(), options)
    output = args.output or DEFAULT_OUTPUT
    _write_bytes(output, result.to_zip())
    logger.info(
        "Wrote %s",
        output,
        extra={"documents": result.document_count, "attachments": result.attachment_count},
    )
    return 0


def _write_text(output: str, text: str) -> None:
    if output == "-":
        sys.stdout.write(text)
        return
    Path(output).write_text(text, encoding="utf-8")


def _write_bytes(output: str, data: bytes) -> None:
    if output == "-":
        sys.stdout.buffer.write(data)
        return
    Path(output).write_bytes(data)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(level=args.log_level)
    try:
        return asyncio.run(run(args))
    except Lakebook2mdError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
