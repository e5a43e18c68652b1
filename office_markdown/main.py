"""Entry-point for the office document to Markdown pipeline."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import BinaryIO, Iterable, List, Optional, Sequence

from office_markdown.converter.registry import available_formats, get_converter
from office_markdown.errors import OfficeMarkdownError, UnsupportedFormatError
from office_markdown.utils.debug import DebugDumper
from office_markdown.utils.logger import get_logger

LOGGER = get_logger(__name__)

FORMAT_BY_SUFFIX = {
    ".docx": "word",
    ".docm": "word",
    ".dotx": "word",
    ".pptx": "powerpoint",
    ".pptm": "powerpoint",
    ".potx": "powerpoint",
}


def format_for_path(path: Path, forced_format: Optional[str] = None) -> str:
    """Format name for an input file, from ``forced_format`` or its suffix."""
    if forced_format:
        return forced_format
    format_name = FORMAT_BY_SUFFIX.get(path.suffix.lower())
    if format_name is None:
        raise UnsupportedFormatError(f"Cannot determine format of {path.name}; use --format")
    return format_name


def convert_file(
    path: Path,
    destination: BinaryIO,
    format_name: Optional[str] = None,
    debug_dir: Optional[Path] = None,
) -> None:
    """Convert one file, writing UTF-8 Markdown into ``destination``."""
    dumper = DebugDumper(debug_dir / path.stem) if debug_dir is not None else None
    converter = get_converter(format_for_path(path, format_name), dumper)
    converter.convert(path.read_bytes(), destination)


def convert_files(
    paths: Iterable[Path],
    output_dir: Optional[Path] = None,
    format_name: Optional[str] = None,
    debug_dir: Optional[Path] = None,
    stdout: Optional[BinaryIO] = None,
) -> List[Path]:
    """Convert inputs one after another; returns the inputs that failed.

    Each file is written to ``<output_dir>/<stem>.md`` when ``output_dir`` is
    given, otherwise all results go to ``stdout`` separated by a blank line.
    """
    failed: List[Path] = []
    sink = stdout if stdout is not None else sys.stdout.buffer
    if output_dir is not None:
        output_dir.mkdir(parents=True, exist_ok=True)

    for index, path in enumerate(paths):
        LOGGER.info("Converting %s", path.name)
        try:
            if output_dir is not None:
                target = output_dir / f"{path.stem}.md"
                with target.open("wb") as handle:
                    convert_file(path, handle, format_name, debug_dir)
                LOGGER.info("Wrote %s", target)
            else:
                if index > 0:
                    sink.write(b"\n")
                convert_file(path, sink, format_name, debug_dir)
        except (OfficeMarkdownError, OSError) as exc:
            LOGGER.error("Failed to convert %s: %s", path, exc)
            failed.append(path)
    return failed


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the office document -> content model -> Markdown pipeline."""
    parser = argparse.ArgumentParser(description="Convert Word and PowerPoint documents into Markdown")
    parser.add_argument("files", nargs="+", type=Path, help="Input .docx/.pptx files")
    parser.add_argument("--format", choices=available_formats(), help="Force a format instead of using the file suffix")
    parser.add_argument("--output-dir", type=Path, help="Write one <name>.md per input into this directory")
    parser.add_argument("--debug-dir", type=Path, help="Dump the parsed content model of each part as JSON")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    failed = convert_files(args.files, args.output_dir, args.format, args.debug_dir)
    return 1 if failed else 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
