"""
utils/catalog.py

Ordered extraction rules for product attribute text. Everything the
extractor decides by precedence lives here as data:

  - ATTRIBUTE_NAMES: known attribute names, in the order the dense scan
    claims text. A compound name that ends with a shorter catalog name
    (型号规格 / 规格) must come before it.
  - NAME_RULES: keys whose value becomes the record name, and whether the
    key stays in the attribute map afterwards.
  - NAME_FALLBACK_KEYS: used for the name when no name key and no brand exist.
  - SEPARATOR_RULES: line markers that start a new product block, tried in order.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Tuple

COLON_CHARS = (":", "：")


@dataclass(frozen=True)
class NameRule:
    key: str
    keep_in_attributes: bool = False


@dataclass(frozen=True)
class SeparatorRule:
    """A line marker that begins a product block.

    When `strip_marker` is set the matched text is numbering only and is
    removed from the line; otherwise the line carries data (a name) and is
    kept intact.
    """
    name: str
    pattern: re.Pattern[str]
    strip_marker: bool = True

    def match(self, line: str) -> Optional[str]:
        """Return the line with the marker handled, or None if it does not start a block."""
        m = self.pattern.match(line)
        if not m:
            return None
        if self.strip_marker:
            return line[m.end():].strip()
        return line


ATTRIBUTE_NAMES: Tuple[str, ...] = (
    "商品名称",
    "产品名称",
    "品名",
    "品牌",
    "用途",
    "型号规格",
    "产品型号",
    "规格",
    "型号",
    "货号",
    "包装方式",
    "材质",
    "颜色",
    "容量",
    "自重",
    "保质期",
    "生产日期",
    "执行标准",
    "产品特点",
    "注意事项",
    "备案人/生产商地址",
    "备案人/生产商",
    "生产商地址",
    "生产商",
    "功效成分",
    "成分",
    "总经销",
    "服务热线",
    "化妆品生产许可证编号",
    "产地",
    "制造商",
    "电话",
    "额定功率",
    "额定电压",
    "额定电流",
    "产品尺寸",
    "产品净重",
    "清洗槽容积",
)

NAME_RULES: Tuple[NameRule, ...] = (
    NameRule("商品名称"),
    NameRule("产品名称"),
    NameRule("品名"),
    NameRule("名称"),
    NameRule("产品"),
    NameRule("商品"),
    NameRule("用途", keep_in_attributes=True),
)

BRAND_KEY = "品牌"

# Attributes that replace the default noun in "<brand> <noun>" names
NOUN_KEYS: Tuple[str, ...] = ("品类", "类别", "产品类型")

NAME_FALLBACK_KEYS: Tuple[str, ...] = ("规格", "型号规格", "型号", "产品型号", "货号")

SEPARATOR_RULES: Tuple[SeparatorRule, ...] = (
    # "1." "2)" "3、" but not "1.5kg"
    SeparatorRule("numeric", re.compile(r"^\d{1,3}\s*[.．)）、](?!\d)\s*")),
    SeparatorRule(
        "chinese_numeral", re.compile(r"^[（(]?[一二三四五六七八九十]{1,3}[）)、.．]\s*")
    ),
    SeparatorRule(
        "product_marker", re.compile(r"^(?:产品|商品)\s*[:：]"), strip_marker=False
    ),
    SeparatorRule(
        "product_name",
        re.compile(r"^(?:商品名称|产品名称|品名)\s*[:：]"),
        strip_marker=False,
    ),
)


@dataclass(frozen=True)
class AttributeCatalog:
    """Bundle of ordered rules; pass a custom one to the extractor for other vocabularies."""
    attribute_names: Tuple[str, ...] = ATTRIBUTE_NAMES
    name_rules: Tuple[NameRule, ...] = NAME_RULES
    brand_key: str = BRAND_KEY
    noun_keys: Tuple[str, ...] = NOUN_KEYS
    name_fallback_keys: Tuple[str, ...] = NAME_FALLBACK_KEYS
    separator_rules: Tuple[SeparatorRule, ...] = SEPARATOR_RULES


DEFAULT_CATALOG = AttributeCatalog()


def has_colon(text: str) -> bool:
    return any(c in text for c in COLON_CHARS)


def first_colon_index(text: str) -> int:
    """Index of the first ASCII or full-width colon, -1 if none."""
    positions = [text.find(c) for c in COLON_CHARS]
    positions = [p for p in positions if p != -1]
    return min(positions) if positions else -1
