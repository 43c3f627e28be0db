"""
utils/renderer.py

Render ProductRecord objects into a single HTML document using the fixed
templates in utils.templates. Output depends only on the records and the
escape flag.
"""
from __future__ import annotations

import html
import re
from typing import Dict, Optional, Sequence

from config.settings import settings
from utils.logger import get_logger
from utils.models import ProductRecord
from utils.templates import ATTRIBUTE_TEMPLATE, DOCUMENT_TEMPLATE, PRODUCT_TEMPLATE

logger = get_logger("renderer")

_PLACEHOLDER_RE = re.compile(r"\{(\w+)\}")


def fill_template(template: str, values: Dict[str, str]) -> str:
    """Substitute {field} placeholders in a single pass; unknown fields are left as-is."""
    return _PLACEHOLDER_RE.sub(lambda m: values.get(m.group(1), m.group(0)), template)


def render_attribute(attr_name: str, attr_value: str, escape: bool = True) -> str:
    if escape:
        attr_name, attr_value = html.escape(attr_name), html.escape(attr_value)
    return fill_template(
        ATTRIBUTE_TEMPLATE, {"attr_name": attr_name, "attr_value": attr_value}
    )


def render_product(record: ProductRecord, escape: bool = True) -> str:
    attributes_html = "\n".join(
        render_attribute(k, v, escape) for k, v in record.attributes.items()
    )
    product_name = html.escape(record.name) if escape else record.name
    return fill_template(
        PRODUCT_TEMPLATE,
        {"product_name": product_name, "attributes_html": attributes_html},
    )


def render(records: Sequence[ProductRecord], escape: Optional[bool] = None) -> str:
    """Return the full HTML document for records (an empty sequence gives an empty content area)."""
    if escape is None:
        escape = settings.ESCAPE_HTML

    products_html = "\n".join(render_product(r, escape) for r in records).strip()
    document = fill_template(
        DOCUMENT_TEMPLATE,
        {
            "document_title": html.escape(settings.DOCUMENT_TITLE),
            "products_html": products_html,
        },
    )
    logger.debug(
        "Rendered HTML document",
        extra={"records": len(records), "escaped": escape, "html_chars": len(document)},
    )
    return document
