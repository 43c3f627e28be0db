#!/usr/bin/env python3
"""Tests for utils/workflow.py: boundary validation and tool dispatch."""

from __future__ import annotations

import json
import sys
import unittest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from utils.errors import InvalidInput, UnknownTool
from utils.models import ProductRecord
from utils.workflow import (
    TOOL_HANDLERS,
    call_tool,
    format_product_text,
    generate_product_html,
    parse_to_records,
    process_product_workflow,
    render_to_html,
)

RAW = "商品名称：硅胶洗漱包\n规格：单支装\n材质：硅胶"


# ---------------------------------------------------------------
# Operations
# ---------------------------------------------------------------

class TestParseToRecords(unittest.TestCase):

    def test_returns_records(self):
        self.assertEqual(
            parse_to_records(RAW),
            [ProductRecord("硅胶洗漱包", {"规格": "单支装", "材质": "硅胶"})],
        )

    def test_empty_string(self):
        self.assertEqual(parse_to_records(""), [])

    def test_rejects_non_string(self):
        for bad in (None, 12, ["text"], b"bytes"):
            with self.assertRaises(InvalidInput) as ctx:
                parse_to_records(bad)
            self.assertEqual(ctx.exception.field, "rawText")


class TestRenderToHtml(unittest.TestCase):

    def test_accepts_json_string(self):
        payload = json.dumps(
            {"products": [{"name": "A", "attributes": {"规格": "x"}}]}, ensure_ascii=False
        )
        out = render_to_html(payload)
        self.assertIn(">A</h4>", out)
        self.assertIn(">x</span>", out)

    def test_accepts_records(self):
        out = render_to_html([ProductRecord("B", {})])
        self.assertIn(">B</h4>", out)

    def test_rejects_missing_attributes(self):
        with self.assertRaises(InvalidInput):
            render_to_html({"products": [{"name": "A"}]})

    def test_rejects_non_string_attribute_key(self):
        with self.assertRaises(InvalidInput):
            render_to_html({"products": [{"name": "a", "attributes": {1: "x"}}]})

    def test_rejects_malformed_json(self):
        with self.assertRaises(InvalidInput):
            render_to_html("not json")


class TestTextOperations(unittest.TestCase):

    def test_format_product_text(self):
        self.assertEqual(
            format_product_text(RAW),
            "1. 商品名称：硅胶洗漱包\n   规格：单支装\n   材质：硅胶",
        )

    def test_generate_product_html(self):
        out = generate_product_html("1. 商品名称：A\n   规格：x")
        self.assertIn(">A</h4>", out)
        self.assertIn(">规格:</strong>", out)

    def test_generate_product_html_rejects_non_string(self):
        with self.assertRaises(InvalidInput) as ctx:
            generate_product_html({"products": []})
        self.assertEqual(ctx.exception.field, "markdownContent")

    def test_process_product_workflow(self):
        result = process_product_workflow(RAW)
        self.assertEqual(result["records"][0].name, "硅胶洗漱包")
        self.assertTrue(result["structured_text"].startswith("1. 商品名称：硅胶洗漱包"))
        self.assertIn("硅胶洗漱包", result["html"])
        self.assertIn("单支装", result["html"])

    def test_workflow_html_matches_structured_text_html(self):
        result = process_product_workflow(RAW)
        self.assertEqual(result["html"], generate_product_html(result["structured_text"]))


# ---------------------------------------------------------------
# call_tool
# ---------------------------------------------------------------

class TestCallTool(unittest.TestCase):

    def test_registered_tools(self):
        self.assertEqual(
            sorted(TOOL_HANDLERS),
            [
                "format_product_text",
                "generate_product_html",
                "parse_product_text",
                "process_product_workflow",
                "render_product_json",
            ],
        )

    def test_unknown_tool(self):
        with self.assertRaises(UnknownTool) as ctx:
            call_tool("delete_everything", {})
        self.assertEqual(ctx.exception.tool_name, "delete_everything")

    def test_arguments_must_be_object(self):
        with self.assertRaises(InvalidInput):
            call_tool("format_product_text", "raw")

    def test_missing_raw_text(self):
        with self.assertRaises(InvalidInput):
            call_tool("format_product_text", {})

    def test_parse_product_text_is_serializable(self):
        out = call_tool("parse_product_text", {"rawText": RAW})
        self.assertEqual(
            out, [{"name": "硅胶洗漱包", "attributes": {"规格": "单支装", "材质": "硅胶"}}]
        )
        json.dumps(out)

    def test_render_product_json_with_products(self):
        out = call_tool(
            "render_product_json", {"products": [{"name": "A", "attributes": {}}]}
        )
        self.assertIn(">A</h4>", out)

    def test_render_product_json_with_json_text(self):
        out = call_tool(
            "render_product_json",
            {"productsJson": '{"products": [{"name": "A", "attributes": {}}]}'},
        )
        self.assertIn(">A</h4>", out)

    def test_render_product_json_requires_products(self):
        with self.assertRaises(InvalidInput):
            call_tool("render_product_json", {})

    def test_workflow_result_is_serializable(self):
        out = call_tool("process_product_workflow", {"rawText": RAW})
        self.assertEqual(out["records"][0]["name"], "硅胶洗漱包")
        json.dumps(out, ensure_ascii=False)

    def test_generate_product_html_tool(self):
        out = call_tool("generate_product_html", {"markdownContent": "1. 商品名称：A"})
        self.assertIn(">A</h4>", out)


if __name__ == "__main__":
    unittest.main()
