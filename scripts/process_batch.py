#!/usr/bin/env python3
"""
Convert a directory of raw product-text files into JSON records and HTML.

Usage:
  python -m scripts.process_batch --input-dir raw/ --output-dir data/products

Every *.txt file under --input-dir (recursive) produces <stem>.json and
<stem>.html in --output-dir (defaults to DATA_DIR), under the same relative
subdirectory it had in --input-dir. A file that cannot be read is logged
and skipped.
"""

from __future__ import annotations
import argparse
from pathlib import Path
from typing import Dict, Optional

from config.settings import settings
from utils.extractor import extract
from utils.logger import get_logger
from utils.models import records_to_json
from utils.renderer import render


logger = get_logger("process_batch")


def process_file(text_path: Path, output_dir: Path) -> int:
    """Write <stem>.json and <stem>.html for one text file; return the record count."""
    raw_text = text_path.read_text(encoding="utf-8")
    records = extract(raw_text)

    output_dir.mkdir(parents=True, exist_ok=True)
    (output_dir / f"{text_path.stem}.json").write_text(
        records_to_json(records), encoding="utf-8"
    )
    (output_dir / f"{text_path.stem}.html").write_text(render(records), encoding="utf-8")
    return len(records)


def process_directory(
    input_dir: Path,
    output_dir: Optional[Path] = None,
) -> Dict[str, int]:
    """
    Process every .txt file in input_dir.
    Returns {"files": processed, "failed": failed, "records": total_records}.
    """
    if not input_dir.is_dir():
        raise FileNotFoundError(f"Input directory not found: {input_dir}")
    if output_dir is None:
        output_dir = Path(settings.DATA_DIR)

    text_files = sorted(p for p in input_dir.glob("**/*.txt") if p.is_file())
    logger.info(
        "Processing text files",
        extra={"count": len(text_files), "input": str(input_dir), "output": str(output_dir)},
    )

    processed = 0
    failed = 0
    total_records = 0
    for path in text_files:
        try:
            target_dir = output_dir / path.relative_to(input_dir).parent
            total_records += process_file(path, target_dir)
            processed += 1
        except (OSError, UnicodeDecodeError):
            failed += 1
            logger.exception("Failed to process text file", extra={"path": str(path)})

    logger.info(
        "Done processing text files",
        extra={"processed": processed, "failed": failed, "records": total_records},
    )
    return {"files": processed, "failed": failed, "records": total_records}


def _parse_args():
    p = argparse.ArgumentParser(
        description="Convert raw product text files to JSON records and HTML."
    )
    p.add_argument(
        "--input-dir", required=True, help="Directory containing .txt files (recursive)."
    )
    p.add_argument(
        "--output-dir",
        required=False,
        help="Where to write .json/.html files. Defaults to DATA_DIR.",
    )
    return p.parse_args()


if __name__ == "__main__":
    args = _parse_args()
    out_dir = Path(args.output_dir) if args.output_dir else None
    process_directory(Path(args.input_dir), out_dir)
