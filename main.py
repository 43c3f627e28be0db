# main.py
"""
CLI entry point for the product text pipeline.
Usage examples:
  # Raw text file -> JSON records on stdout
  python main.py parse --input product.txt

  # JSON records -> HTML file
  python main.py render --input products.json --output products.html

  # Raw text -> HTML in one step (text from stdin)
  cat product.txt | python main.py workflow

  # Raw text -> numbered structured text
  python main.py format --text "商品名称：硅胶洗漱包 规格：单支装"
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Callable, Dict, List, Optional

from utils.errors import InvalidInput
from utils.logger import get_logger
from utils.models import records_to_json
from utils import workflow

logger = get_logger("main")


def _read_input(args: argparse.Namespace) -> str:
    if args.text is not None:
        return args.text
    if args.input:
        p = Path(args.input)
        if not p.exists():
            raise FileNotFoundError(f"Input file not found: {args.input}")
        return p.read_text(encoding="utf-8")
    return sys.stdin.read()


def _write_output(content: str, output: Optional[str]) -> None:
    if output:
        p = Path(output)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(content, encoding="utf-8")
        logger.info("Wrote output", extra={"path": str(p), "chars": len(content)})
    else:
        sys.stdout.write(content + "\n")


def _cmd_parse(text: str) -> str:
    return records_to_json(workflow.parse_to_records(text))


def _cmd_render(text: str) -> str:
    return workflow.render_to_html(text)


def _cmd_workflow(text: str) -> str:
    return workflow.process_product_workflow(text)["html"]


def _cmd_format(text: str) -> str:
    return workflow.format_product_text(text)


COMMANDS: Dict[str, Callable[[str], str]] = {
    "parse": _cmd_parse,
    "render": _cmd_render,
    "workflow": _cmd_workflow,
    "format": _cmd_format,
}


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Convert product description text into structured records and HTML."
    )
    parser.add_argument(
        "command",
        choices=sorted(COMMANDS),
        help="parse: text->JSON, render: JSON->HTML, workflow: text->HTML, format: text->structured text",
    )
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--input", help="Path to the input file (defaults to stdin)", type=str)
    group.add_argument("--text", help="Input passed inline", type=str)
    parser.add_argument("--output", help="Path to write the result (defaults to stdout)", type=str)
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    try:
        content = COMMANDS[args.command](_read_input(args))
    except (InvalidInput, FileNotFoundError) as exc:
        logger.error("Command failed", extra={"command": args.command, "error": str(exc)})
        return 1
    try:
        _write_output(content, args.output)
    except OSError as exc:
        logger.error("Could not write output", extra={"output": args.output, "error": str(exc)})
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
