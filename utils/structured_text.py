"""
Numbered structured-text form of product records.

Format (one block per product, blocks separated by a blank line):

    1. 商品名称：硅胶洗漱包
       规格：单支装
       材质：硅胶

    2. 商品名称：...

See templates/product_template.md for a full sample.
"""
from __future__ import annotations

import re
from typing import List, Sequence

from config.settings import settings
from utils.extractor import split_pair
from utils.models import ProductRecord

NAME_KEY = "商品名称"
INDENT = "   "

_BLOCK_SPLIT_RE = re.compile(r"\n\s*\n")
_NUMBER_PREFIX_RE = re.compile(r"^\d+\.\s*")


def format_records(records: Sequence[ProductRecord]) -> str:
    blocks = []
    for idx, record in enumerate(records, start=1):
        lines = [f"{idx}. {NAME_KEY}：{record.name}"]
        lines.extend(f"{INDENT}{k}：{v}" for k, v in record.attributes.items())
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks)


def parse_structured_text(text: str) -> List[ProductRecord]:
    """
    Parse the numbered format back into records. Blocks that do not start
    with "<n>." are ignored. The first line gives the name (商品名称 value,
    or the line itself without its number); later lines are "key：value".
    """
    records: List[ProductRecord] = []
    for block in _BLOCK_SPLIT_RE.split(text.strip()):
        block = block.strip()
        if not block or not _NUMBER_PREFIX_RE.match(block):
            continue

        lines = block.split("\n")
        first = _NUMBER_PREFIX_RE.sub("", lines[0].strip(), count=1)
        pair = split_pair(first)
        if pair and pair[0] == NAME_KEY:
            name = pair[1]
        else:
            name = first.strip()
        if not name:
            name = settings.POSITIONAL_NAME_TEMPLATE.format(index=len(records) + 1)

        attributes = {}
        for line in lines[1:]:
            pair = split_pair(line)
            if pair:
                attributes.setdefault(*pair)
        records.append(ProductRecord(name=name, attributes=attributes))
    return records
