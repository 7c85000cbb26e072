#!/usr/bin/env python3
"""
Focus Area CLI

Prints the focus area (trimmed block, extended block and curated names)
around a position or selection in a source file.

Usage:
    focus-area app.py --line 42 --character 8                    # Cursor
    focus-area app.py --line 40 --character 0 --end-line 48      # Selection
    focus-area app.ts --line 10 --character 0 --language typescript
    focus-area --help                                            # Show help
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Dict, List, Optional

from loguru import logger

from focus_area.modules.config import load_config
from focus_area.modules.context_windowing import FocusAreaExtractor
from focus_area.modules.document import EditorSnapshot, Range, TextDocument

# File extension -> editor language id
EXTENSION_LANGUAGES: Dict[str, str] = {
    ".py": "python",
    ".java": "java",
    ".js": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".jsx": "javascriptreact",
    ".ts": "typescript",
    ".tsx": "typescriptreact",
}


LOG_FORMAT = "<level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"


def setup_logging(verbose: bool = False, log_file: Optional[str] = None):
    """Send logs to stderr so stdout stays pure JSON."""
    logger.remove()
    logger.add(sys.stderr, format=LOG_FORMAT, level="DEBUG" if verbose else "WARNING")
    if log_file:
        logger.add(log_file, format=LOG_FORMAT, level="DEBUG", colorize=False, rotation="10 MB")


def infer_language(path: Path) -> str:
    return EXTENSION_LANGUAGES.get(path.suffix.lower(), "plaintext")


def build_editor(args: argparse.Namespace) -> EditorSnapshot:
    path = Path(args.file)
    text = path.read_text(encoding="utf-8", errors="replace")
    document = TextDocument(text, language_id=args.language or infer_language(path))

    end_line = args.line if args.end_line is None else args.end_line
    end_character = args.character if args.end_character is None else args.end_character
    selection = Range.from_coords(args.line, args.character, end_line, end_character)

    return EditorSnapshot.with_viewport(document, selection, viewport_lines=args.viewport_lines)


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="focus-area",
        description="Extract the bounded focus area around a cursor or selection",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("file", type=str, help="Source file to read")
    parser.add_argument("--line", "-l", type=int, required=True, help="Zero-based selection start line")
    parser.add_argument("--character", "-c", type=int, default=0, help="Zero-based selection start character")
    parser.add_argument("--end-line", type=int, help="Zero-based selection end line (default: cursor only)")
    parser.add_argument("--end-character", type=int, help="Zero-based selection end character")
    parser.add_argument("--language", type=str, help="Language id (default: inferred from extension)")
    parser.add_argument(
        "--viewport-lines", type=int, default=40, help="Visible lines around a bare cursor (default: 40)"
    )
    parser.add_argument("--config", type=str, default="config.yaml", help="Path to config file (default: config.yaml)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose/debug output")
    parser.add_argument("--log-file", type=str, help="Path to log file (optional)")
    parser.add_argument("--version", action="version", version="Focus Area v1.0")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = create_parser().parse_args(argv)
    setup_logging(verbose=args.verbose, log_file=args.log_file)

    if not Path(args.file).is_file():
        logger.error(f"File not found: {args.file}")
        return 1

    try:
        editor = build_editor(args)
    except (ValueError, IndexError) as e:
        logger.error(f"Invalid selection: {e}")
        return 1

    extractor = FocusAreaExtractor(config=load_config(args.config))
    context = asyncio.run(extractor.extract(editor))
    if context is None:
        logger.error("No focus area available")
        return 1

    print(json.dumps(context.to_payload(), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
