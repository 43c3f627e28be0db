# scripts/json_to_html.py
"""
Standalone converter from product JSON to HTML.
Provides:
  - run(input_path, output_path=None) -> Path of the written HTML file
  - CLI to run directly:
      python -m scripts.json_to_html products.json
      python -m scripts.json_to_html products.json output.html
      cat products.json | python -m scripts.json_to_html -

Input must look like {"products": [{"name": ..., "attributes": {...}}]}.
When no output path is given the HTML is written to <input basename>.html
in the current directory (stdin input prints to stdout instead).
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional

from utils.errors import InvalidInput
from utils.logger import get_logger
from utils.models import records_from_payload
from utils.renderer import render

logger = get_logger("json_to_html")


def convert(json_text: str) -> str:
    """Return HTML for a JSON document; raises InvalidInput on a bad shape."""
    return render(records_from_payload(json_text))


def run(input_path: str, output_path: Optional[str] = None) -> Path:
    src = Path(input_path)
    if not src.exists():
        raise FileNotFoundError(f"Input file not found: {input_path}")

    html_doc = convert(src.read_text(encoding="utf-8"))

    dest = Path(output_path) if output_path else Path(f"{src.stem}.html")
    dest.parent.mkdir(parents=True, exist_ok=True)
    dest.write_text(html_doc, encoding="utf-8")
    logger.info("HTML generated successfully", extra={"output": str(dest)})
    return dest


def _parse_cli_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Convert product JSON ({\"products\": [...]}) to HTML."
    )
    parser.add_argument("input", help="Input JSON file, or '-' to read stdin")
    parser.add_argument("output", nargs="?", help="Output HTML file")
    return parser.parse_args()


if __name__ == "__main__":
    args = _parse_cli_args()
    try:
        if args.input == "-":
            html_out = convert(sys.stdin.read())
            if args.output:
                dest = Path(args.output)
                dest.parent.mkdir(parents=True, exist_ok=True)
                dest.write_text(html_out, encoding="utf-8")
                logger.info("HTML generated successfully", extra={"output": args.output})
            else:
                sys.stdout.write(html_out + "\n")
        else:
            run(args.input, args.output)
    except (InvalidInput, FileNotFoundError) as exc:
        logger.error("Conversion failed", extra={"error": str(exc)})
        raise SystemExit(1)
