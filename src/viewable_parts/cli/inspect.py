"""
Command-line interface for listing the viewable parts of .eml files.

Usage:
    # All viewable parts of a single file
    python -m viewable_parts.cli.inspect input.eml

    # Only the HTML parts
    python -m viewable_parts.cli.inspect input.eml --mode html

    # Custom preference for multipart/alternative blocks
    python -m viewable_parts.cli.inspect input.eml --prefer text/plain --accept text/html

    # Directory batch processing
    python -m viewable_parts.cli.inspect emails/ --output results.jsonl
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

import structlog

from viewable_parts.config import settings
from viewable_parts.logging_config import setup_logging
from viewable_parts.models.part_summary import SelectionReport, build_part_summaries
from viewable_parts.parsing.eml_parser import parse_eml_bytes
from viewable_parts.selection import Selector, get_default_selector


logger = structlog.get_logger(__name__)

MODES = ("viewable", "html", "text", "first")


# ============================================================================
# CLI FUNCTIONS
# ============================================================================

def select_parts(
    selector: Selector,
    msg,
    mode: str,
    preferred: Optional[List[str]] = None,
    acceptable: Optional[List[str]] = None,
) -> list:
    """
    Run one selection mode over a parsed message.

    Args:
        selector: Selector to use
        msg: Parsed email.Message
        mode: One of MODES
        preferred: Preferred types (viewable/first modes only)
        acceptable: Acceptable types (viewable/first modes only)

    Returns:
        Selected parts, in tree order
    """
    if mode == "html":
        return selector.get_html_parts(msg)
    if mode == "text":
        return selector.get_text_parts(msg)
    if mode == "first":
        if preferred is None and acceptable is None:
            preferred = acceptable = selector.viewable_types
        first = selector.select_first(msg, preferred, acceptable)
        return [first] if first is not None else []
    if mode == "viewable":
        return selector.get_viewable_parts(msg, preferred, acceptable)
    raise ValueError(f"Unknown mode: {mode}")


def process_single_file(
    eml_path: Path,
    mode: str = "viewable",
    preferred: Optional[List[str]] = None,
    acceptable: Optional[List[str]] = None,
    selector: Optional[Selector] = None,
    verbose: bool = False,
) -> dict:
    """
    Select the viewable parts of a single .eml file.

    Args:
        eml_path: Path to .eml file
        mode: Selection mode
        preferred: Optional preferred types for alternatives
        acceptable: Optional acceptable types for alternatives
        selector: Selector to use (default: process-wide selector)
        verbose: Enable verbose output

    Returns:
        SelectionReport as dict

    Raises:
        ValueError: If the file is too large or cannot be parsed
        ViewablePartsError: If selection fails
    """
    selector = selector or get_default_selector()

    if verbose:
        logger.info("processing_file", path=str(eml_path), mode=mode)

    size_bytes = eml_path.stat().st_size
    max_bytes = settings.max_email_size_mb * 1024 * 1024
    if size_bytes > max_bytes:
        raise ValueError(
            f"File too large: {size_bytes} bytes (max {settings.max_email_size_mb} MB)"
        )

    msg = parse_eml_bytes(eml_path.read_bytes())
    parts = select_parts(selector, msg, mode, preferred, acceptable)

    report = SelectionReport(
        source=str(eml_path),
        mode=mode,
        parts=build_part_summaries(msg, parts),
    )

    if verbose:
        logger.info("file_processed", path=str(eml_path), parts_count=len(report.parts))

    return report.model_dump()


def process_directory(
    dir_path: Path,
    mode: str = "viewable",
    preferred: Optional[List[str]] = None,
    acceptable: Optional[List[str]] = None,
    selector: Optional[Selector] = None,
    verbose: bool = False,
) -> tuple:
    """
    Select the viewable parts of all .eml files in a directory.

    Files that fail are logged and reported, they do not stop the batch.

    Returns:
        Tuple of (reports, errors)
    """
    eml_files = sorted(dir_path.glob("**/*.eml"))

    if not eml_files:
        logger.warning("no_eml_files_found", directory=str(dir_path))
        return [], []

    logger.info("processing_directory", files_count=len(eml_files))

    results = []
    errors = []

    for eml_file in eml_files:
        try:
            results.append(
                process_single_file(
                    eml_path=eml_file,
                    mode=mode,
                    preferred=preferred,
                    acceptable=acceptable,
                    selector=selector,
                    verbose=verbose,
                )
            )
        except Exception as e:
            logger.error("file_processing_failed", file=str(eml_file), error=str(e))
            errors.append({"file": str(eml_file), "error": str(e)})

    logger.info(
        "directory_processing_completed",
        total=len(eml_files),
        success=len(results),
        errors=len(errors),
    )

    return results, errors


def write_output(results: List[dict], output_path: Optional[Path], format: str = "jsonl"):
    """
    Write reports to a file or stdout.

    Args:
        results: List of selection reports
        output_path: Output file path (None for stdout)
        format: Output format ("json" or "jsonl")
    """
    if not output_path:
        if format == "jsonl":
            for result in results:
                print(json.dumps(result, ensure_ascii=False))
        else:
            print(json.dumps(results, ensure_ascii=False, indent=2))
        return

    with open(output_path, "w", encoding="utf-8") as f:
        if format == "jsonl":
            for result in results:
                f.write(json.dumps(result, ensure_ascii=False) + "\n")
        else:
            json.dump(results, f, ensure_ascii=False, indent=2)

    logger.info("output_written", path=str(output_path), count=len(results))


# ============================================================================
# MAIN CLI
# ============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Viewable Parts CLI - List the MIME parts a mail client would display",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # All viewable parts
  %(prog)s input.eml

  # HTML parts only
  %(prog)s input.eml --mode html

  # Prefer plain text inside multipart/alternative
  %(prog)s input.eml --prefer text/plain --accept text/html

  # Process directory, save to file
  %(prog)s emails/ --output results.jsonl
        """,
    )

    parser.add_argument(
        "input",
        type=str,
        help="Path to .eml file or directory containing .eml files",
    )

    parser.add_argument(
        "--mode",
        "-m",
        choices=MODES,
        default="viewable",
        help="Selection to perform (default: viewable)",
    )

    parser.add_argument(
        "--prefer",
        action="append",
        default=None,
        metavar="TYPE",
        help="Preferred type inside multipart/alternative (repeatable)",
    )

    parser.add_argument(
        "--accept",
        action="append",
        default=None,
        metavar="TYPE",
        help="Acceptable fallback type inside multipart/alternative (repeatable)",
    )

    parser.add_argument(
        "--output",
        "-o",
        type=str,
        default=None,
        help="Output file path (default: stdout). Format auto-detected from extension (.json or .jsonl)",
    )

    parser.add_argument(
        "--format",
        "-f",
        type=str,
        choices=["json", "jsonl"],
        default="jsonl",
        help="Output format (default: jsonl)",
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    setup_logging()
    args = build_parser().parse_args(argv)

    if (args.prefer or args.accept) and args.mode in ("html", "text"):
        print("Error: --prefer/--accept only apply to viewable and first modes", file=sys.stderr)
        return 2

    input_path = Path(args.input)

    if not input_path.exists():
        print(f"Error: Path not found: {input_path}", file=sys.stderr)
        return 1

    errors = []

    try:
        if input_path.is_file():
            results = [
                process_single_file(
                    eml_path=input_path,
                    mode=args.mode,
                    preferred=args.prefer,
                    acceptable=args.accept,
                    verbose=args.verbose,
                )
            ]
        elif input_path.is_dir():
            results, errors = process_directory(
                dir_path=input_path,
                mode=args.mode,
                preferred=args.prefer,
                acceptable=args.accept,
                verbose=args.verbose,
            )
        else:
            print(f"Error: Invalid input path: {input_path}", file=sys.stderr)
            return 1

        output_path = Path(args.output) if args.output else None

        # Auto-detect format from file extension
        if output_path and args.format == "jsonl" and output_path.suffix == ".json":
            format = "json"
        else:
            format = args.format

        write_output(results, output_path, format)

    except Exception as e:
        logger.error("cli_failed", error=str(e), exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if errors:
        print(f"Error: {len(errors)} file(s) failed", file=sys.stderr)
        return 1

    if args.verbose:
        print(f"\nProcessed {len(results)} emails successfully", file=sys.stderr)

    return 0


if __name__ == "__main__":
    sys.exit(main())
