"""
utils/workflow.py

Operations exposed to the calling agent. Each validates its arguments and
then calls the pure extractor/renderer; nothing here retries or swallows
errors.

Usage:
    from utils.workflow import call_tool
    html = call_tool("process_product_workflow", {"rawText": text})["html"]
"""
from __future__ import annotations

from typing import Any, Callable, Dict, List, Mapping

from utils.errors import InvalidInput, UnknownTool
from utils.extractor import extract
from utils.logger import get_logger
from utils.models import ProductRecord, records_from_payload
from utils.renderer import render
from utils.structured_text import format_records, parse_structured_text

logger = get_logger("workflow")


def _require_text(value: Any, field: str) -> str:
    if not isinstance(value, str):
        raise InvalidInput(f"{field} parameter is required and must be a string", field=field)
    return value


def parse_to_records(raw_text: Any) -> List[ProductRecord]:
    return extract(_require_text(raw_text, "rawText"))


def render_to_html(products: Any) -> str:
    """Render records, a {"products": [...]} object, a bare list, or the JSON text of either."""
    return render(records_from_payload(products))


def format_product_text(raw_text: Any) -> str:
    """Raw text -> numbered structured text."""
    return format_records(parse_to_records(raw_text))


def generate_product_html(markdown_content: Any) -> str:
    """Numbered structured text -> HTML."""
    text = _require_text(markdown_content, "markdownContent")
    return render(parse_structured_text(text))


def process_product_workflow(raw_text: Any) -> Dict[str, Any]:
    """Raw text -> records, structured text and HTML in one step."""
    records = parse_to_records(raw_text)
    return {
        "records": records,
        "structured_text": format_records(records),
        "html": render(records),
    }


def _products_argument(arguments: Mapping[str, Any]) -> Any:
    if "products" in arguments:
        return {"products": arguments["products"]}
    if "productsJson" in arguments:
        return arguments["productsJson"]
    raise InvalidInput("products or productsJson parameter is required", field="products")


def _workflow_tool(arguments: Mapping[str, Any]) -> Dict[str, Any]:
    result = process_product_workflow(arguments.get("rawText"))
    result["records"] = [r.to_dict() for r in result["records"]]
    return result


TOOL_HANDLERS: Dict[str, Callable[[Mapping[str, Any]], Any]] = {
    "parse_product_text": lambda a: [r.to_dict() for r in parse_to_records(a.get("rawText"))],
    "render_product_json": lambda a: render_to_html(_products_argument(a)),
    "format_product_text": lambda a: format_product_text(a.get("rawText")),
    "generate_product_html": lambda a: generate_product_html(a.get("markdownContent")),
    "process_product_workflow": _workflow_tool,
}


def call_tool(tool_name: str, arguments: Any) -> Any:
    """Dispatch a named tool call; raises UnknownTool or InvalidInput."""
    handler = TOOL_HANDLERS.get(tool_name)
    if handler is None:
        logger.error("Unknown tool requested", extra={"tool": tool_name})
        raise UnknownTool(tool_name)
    if not isinstance(arguments, Mapping):
        raise InvalidInput("arguments must be an object", field="arguments")

    logger.info("Dispatching tool call", extra={"tool": tool_name})
    try:
        return handler(arguments)
    except InvalidInput as exc:
        logger.warning(
            "Rejected tool arguments", extra={"tool": tool_name, "field": exc.field}
        )
        raise
