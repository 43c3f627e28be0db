"""
utils/extractor.py

Turn raw product-description text into ProductRecord objects.

Input shapes handled (first match wins):
  - line-alternating pairs: "品牌\\n上海品磊\\n自重\\n1.5-10" (no colon anywhere)
  - one or more numbered / marked product blocks, each split into lines
  - "key：value" lines, one attribute per line
  - run-on prose holding several "key：value" pairs on one line (dense scan)

Usage:
    from utils.extractor import extract
    records = extract("商品名称：硅胶洗漱包\\n规格：单支装")
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from config.settings import settings
from utils.catalog import (
    COLON_CHARS,
    DEFAULT_CATALOG,
    AttributeCatalog,
    SeparatorRule,
    first_colon_index,
    has_colon,
)
from utils.logger import get_logger
from utils.models import ProductRecord

logger = get_logger("extractor")

_BULLET_CHARS = "-*•·"
_VALUE_TRAILING = "，,;；、"


@dataclass
class Block:
    """Contiguous lines describing one product."""
    lines: List[str] = field(default_factory=list)
    numbered: bool = False  # numbering marker was stripped from the first line


# -------------------------
# Line helpers
# -------------------------
def split_lines(text: str) -> List[str]:
    return [ln.strip() for ln in text.splitlines() if ln.strip()]


def is_line_alternating(lines: List[str]) -> bool:
    """No colon anywhere, an even number of lines, more than one line."""
    return (
        len(lines) > 1
        and len(lines) % 2 == 0
        and not any(has_colon(ln) for ln in lines)
    )


def clean_key(raw: str) -> str:
    """Strip list bullets and markdown bold from an attribute name."""
    key = raw.strip().lstrip(_BULLET_CHARS).strip()
    return key.strip("*").strip()


def split_pair(line: str) -> Optional[Tuple[str, str]]:
    """Split "name：value" at the first colon; None when either side is empty."""
    idx = first_colon_index(line)
    if idx == -1:
        return None
    key = clean_key(line[:idx])
    value = line[idx + 1:].strip()
    if not key or not value:
        return None
    return key, value


# -------------------------
# Block splitting
# -------------------------
def _split_on_rule(lines: List[str], rule: SeparatorRule) -> Optional[List[Block]]:
    """Split lines at every line the rule matches.

    Returns None unless more than one marked segment is non-empty. When the
    lines before the first marker already hold key/value data, at least two
    segments must hold key/value data too, so a numbered feature list under
    a described product ("产品特点：\\n1、防水\\n2、轻便") does not split it.
    """
    leading: List[str] = []
    blocks: List[Block] = []
    current: Optional[Block] = None

    for line in lines:
        remainder = rule.match(line)
        if remainder is None:
            if current is None:
                leading.append(line)
            else:
                current.lines.append(line)
            continue
        current = Block(numbered=rule.strip_marker)
        blocks.append(current)
        if remainder:
            current.lines.append(remainder)

    if len([b for b in blocks if b.lines]) < 2:
        return None
    if any(has_colon(ln) for ln in leading):
        with_data = [b for b in blocks if any(has_colon(ln) for ln in b.lines)]
        if len(with_data) < 2:
            return None
    if leading:
        blocks.insert(0, Block(lines=leading))
    return blocks


def split_blocks(text: str, catalog: AttributeCatalog = DEFAULT_CATALOG) -> List[Block]:
    """Split raw text into product blocks; empty text gives an empty list."""
    lines = split_lines(text)
    if not lines:
        return []

    if is_line_alternating(lines):
        logger.debug("Detected line-alternating input", extra={"lines": len(lines)})
        return [Block(lines=lines)]

    for rule in catalog.separator_rules:
        blocks = _split_on_rule(lines, rule)
        if blocks is not None:
            logger.debug(
                "Split input into product blocks",
                extra={"rule": rule.name, "blocks": len(blocks)},
            )
            return blocks

    return [Block(lines=lines)]


# -------------------------
# Attribute parsing
# -------------------------
def find_markers(
    text: str, catalog: AttributeCatalog = DEFAULT_CATALOG
) -> List[Tuple[int, int, str]]:
    """
    Locate every "<catalog name><colon>" in text as (start, end, name), sorted
    by position. Names are tried in catalog order and an occurrence that
    overlaps one already claimed is dropped.
    """
    claimed: List[Tuple[int, int, str]] = []
    for name in catalog.attribute_names:
        start = text.find(name)
        while start != -1:
            colon_at = start + len(name)
            if colon_at < len(text) and text[colon_at] in COLON_CHARS:
                end = colon_at + 1
                overlaps = any(start < c_end and c_start < end for c_start, c_end, _ in claimed)
                if not overlaps:
                    claimed.append((start, end, name))
            start = text.find(name, start + 1)
    claimed.sort()
    return claimed


def scan_dense(text: str, catalog: AttributeCatalog = DEFAULT_CATALOG) -> Dict[str, str]:
    """
    Pull catalog attributes out of unsegmented prose. Each value runs up to
    the next claimed marker or the end of text. Result is in catalog order.
    """
    markers = find_markers(text, catalog)
    found: Dict[str, str] = {}
    for i, (_, end, name) in enumerate(markers):
        if name in found:
            continue
        stop = markers[i + 1][0] if i + 1 < len(markers) else len(text)
        value = text[end:stop].strip().rstrip(_VALUE_TRAILING).strip()
        if value:
            found[name] = value
    return {name: found[name] for name in catalog.attribute_names if name in found}


def parse_alternating(lines: List[str]) -> Dict[str, str]:
    attributes: Dict[str, str] = {}
    for i in range(0, len(lines) - 1, 2):
        key = clean_key(lines[i])
        value = lines[i + 1].strip()
        if key and value:
            attributes.setdefault(key, value)
    return attributes


def parse_colon_lines(
    lines: List[str], catalog: AttributeCatalog = DEFAULT_CATALOG
) -> Dict[str, str]:
    """One attribute per line; lines holding two or more catalog markers go through the dense scan."""
    attributes: Dict[str, str] = {}
    for line in lines:
        markers = find_markers(line, catalog)
        if len(markers) >= 2:
            # text before the first catalog marker may hold its own "key：value"
            prefix = line[:markers[0][0]].strip().rstrip(_VALUE_TRAILING)
            lead = split_pair(prefix)
            if lead:
                attributes.setdefault(*lead)
            for key, value in scan_dense(line, catalog).items():
                attributes.setdefault(key, value)
            continue
        pair = split_pair(line)
        if pair:
            attributes.setdefault(*pair)
    return attributes


def parse_block(
    block: Block, catalog: AttributeCatalog = DEFAULT_CATALOG
) -> Tuple[Dict[str, str], Optional[str]]:
    """Return (attributes, title) for one block. Title is a bare heading after a number marker."""
    if is_line_alternating(block.lines):
        return parse_alternating(block.lines), None

    lines = block.lines
    title = None
    if block.numbered and lines and not has_colon(lines[0]):
        title, lines = lines[0], lines[1:]
    return parse_colon_lines(lines, catalog), title


# -------------------------
# Name resolution
# -------------------------
def resolve_name(
    attributes: Dict[str, str],
    title: Optional[str],
    index: int,
    total: int,
    catalog: AttributeCatalog = DEFAULT_CATALOG,
) -> Tuple[str, Dict[str, str]]:
    """
    Pick the display name for a block. Returns (name, attributes) where the
    attributes no longer hold a name key that the rule says to drop.

    Order: name keys > heading title > "<brand> <noun>" > fallback keys >
    positional placeholder (multi-block) or the single-product label.
    """
    attributes = dict(attributes)

    for rule in catalog.name_rules:
        value = attributes.get(rule.key)
        if value:
            if not rule.keep_in_attributes:
                del attributes[rule.key]
            return value, attributes

    if title:
        return title, attributes

    brand = attributes.get(catalog.brand_key)
    if brand:
        noun = next(
            (attributes[k] for k in catalog.noun_keys if attributes.get(k)),
            settings.DEFAULT_PRODUCT_NOUN,
        )
        return f"{brand} {noun}", attributes

    for key in catalog.name_fallback_keys:
        if attributes.get(key):
            return attributes[key], attributes

    if total > 1:
        return settings.POSITIONAL_NAME_TEMPLATE.format(index=index), attributes
    return settings.SINGLE_PRODUCT_LABEL, attributes


# -------------------------
# Entry point
# -------------------------
def extract(
    raw_text: str, catalog: Optional[AttributeCatalog] = None
) -> List[ProductRecord]:
    """
    Extract product records from raw text. Never raises for string input;
    text without recognizable structure gives an empty list. A block with
    neither attributes nor a heading is skipped.
    """
    catalog = catalog or DEFAULT_CATALOG
    blocks = split_blocks(raw_text, catalog)

    parsed: List[Tuple[Dict[str, str], Optional[str]]] = []
    for block_index, block in enumerate(blocks, start=1):
        attributes, title = parse_block(block, catalog)
        if not attributes and not title:
            logger.debug("Skipping block without attributes", extra={"block_index": block_index})
            continue
        parsed.append((attributes, title))

    # Placeholder positions count only the blocks that become records
    records: List[ProductRecord] = []
    for index, (attributes, title) in enumerate(parsed, start=1):
        name, attributes = resolve_name(attributes, title, index, len(parsed), catalog)
        records.append(ProductRecord(name=name, attributes=attributes))

    logger.info(
        "Extracted product records",
        extra={
            "input_chars": len(raw_text),
            "blocks": len(blocks),
            "records": len(records),
        },
    )
    return records
