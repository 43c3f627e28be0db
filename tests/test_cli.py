#!/usr/bin/env python3
"""Tests for main.py and the scripts/ converters: file and stdout handling."""

from __future__ import annotations

import io
import json
import os
import sys
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import main
from scripts import json_to_html, process_batch
from utils.errors import InvalidInput

RAW = "1. 商品名称：A\n规格：x\n2. 商品名称：B\n规格：y"
PRODUCTS = {"products": [{"name": "A", "attributes": {"规格": "x"}}]}


# ---------------------------------------------------------------
# main.py
# ---------------------------------------------------------------

class TestMain(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    def _run(self, argv):
        buf = io.StringIO()
        with redirect_stdout(buf):
            code = main.main(argv)
        return code, buf.getvalue()

    def test_parse_inline_text(self):
        code, out = self._run(["parse", "--text", RAW])
        self.assertEqual(code, 0)
        data = json.loads(out)
        self.assertEqual([p["name"] for p in data["products"]], ["A", "B"])

    def test_render_file_to_file(self):
        src = self.tmp / "products.json"
        src.write_text(json.dumps(PRODUCTS, ensure_ascii=False), encoding="utf-8")
        dest = self.tmp / "out" / "products.html"
        code, out = self._run(["render", "--input", str(src), "--output", str(dest)])
        self.assertEqual(code, 0)
        self.assertEqual(out, "")
        self.assertIn(">A</h4>", dest.read_text(encoding="utf-8"))

    def test_workflow_outputs_html(self):
        code, out = self._run(["workflow", "--text", RAW])
        self.assertEqual(code, 0)
        self.assertIn(">B</h4>", out)

    def test_format_outputs_structured_text(self):
        code, out = self._run(["format", "--text", RAW])
        self.assertEqual(code, 0)
        self.assertTrue(out.startswith("1. 商品名称：A"))

    def test_missing_input_file(self):
        code, _ = self._run(["parse", "--input", str(self.tmp / "nope.txt")])
        self.assertEqual(code, 1)

    def test_unwritable_output(self):
        code, out = self._run(["parse", "--text", RAW, "--output", str(self.tmp)])
        self.assertEqual(code, 1)
        self.assertEqual(out, "")

    def test_render_rejects_bad_json(self):
        code, out = self._run(["render", "--text", "[1, 2"])
        self.assertEqual(code, 1)
        self.assertEqual(out, "")


# ---------------------------------------------------------------
# scripts/json_to_html.py
# ---------------------------------------------------------------

class TestJsonToHtml(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)
        self.src = self.tmp / "catalog.json"
        self.src.write_text(json.dumps(PRODUCTS, ensure_ascii=False), encoding="utf-8")

    def tearDown(self):
        self._tmp.cleanup()

    def test_explicit_output(self):
        dest = json_to_html.run(str(self.src), str(self.tmp / "page.html"))
        self.assertEqual(dest, self.tmp / "page.html")
        self.assertIn(">x</span>", dest.read_text(encoding="utf-8"))

    def test_default_output_named_after_input(self):
        cwd = os.getcwd()
        os.chdir(self.tmp)
        try:
            dest = json_to_html.run(str(self.src))
            self.assertEqual(dest.name, "catalog.html")
            self.assertTrue((self.tmp / "catalog.html").exists())
        finally:
            os.chdir(cwd)

    def test_missing_input(self):
        with self.assertRaises(FileNotFoundError):
            json_to_html.run(str(self.tmp / "missing.json"))

    def test_invalid_structure(self):
        self.src.write_text('{"items": []}', encoding="utf-8")
        with self.assertRaises(InvalidInput):
            json_to_html.run(str(self.src), str(self.tmp / "page.html"))

    def test_convert(self):
        self.assertIn(">A</h4>", json_to_html.convert(json.dumps(PRODUCTS)))


# ---------------------------------------------------------------
# scripts/process_batch.py
# ---------------------------------------------------------------

class TestProcessBatch(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)
        self.in_dir = self.tmp / "raw"
        (self.in_dir / "nested").mkdir(parents=True)
        (self.in_dir / "multi.txt").write_text(RAW, encoding="utf-8")
        (self.in_dir / "nested" / "brand.txt").write_text("品牌\nACME\n自重\n2kg", encoding="utf-8")
        (self.in_dir / "ignored.md").write_text("商品名称：X", encoding="utf-8")
        self.out_dir = self.tmp / "out"

    def tearDown(self):
        self._tmp.cleanup()

    def test_processes_text_files(self):
        summary = process_batch.process_directory(self.in_dir, self.out_dir)
        self.assertEqual(summary, {"files": 2, "failed": 0, "records": 3})
        data = json.loads((self.out_dir / "multi.json").read_text(encoding="utf-8"))
        self.assertEqual([p["name"] for p in data["products"]], ["A", "B"])
        self.assertIn(
            "ACME", (self.out_dir / "nested" / "brand.html").read_text(encoding="utf-8")
        )
        self.assertFalse((self.out_dir / "ignored.json").exists())

    def test_same_stem_in_subdirectories_kept_apart(self):
        for sub, name in (("a", "甲"), ("b", "乙")):
            (self.in_dir / sub).mkdir()
            (self.in_dir / sub / "x.txt").write_text(f"商品名称：{name}", encoding="utf-8")
        process_batch.process_directory(self.in_dir, self.out_dir)
        first = json.loads((self.out_dir / "a" / "x.json").read_text(encoding="utf-8"))
        second = json.loads((self.out_dir / "b" / "x.json").read_text(encoding="utf-8"))
        self.assertEqual(first["products"][0]["name"], "甲")
        self.assertEqual(second["products"][0]["name"], "乙")

    def test_undecodable_file_is_skipped(self):
        (self.in_dir / "bad.txt").write_bytes(b"\xff\xfe\xfa")
        summary = process_batch.process_directory(self.in_dir, self.out_dir)
        self.assertEqual(summary["failed"], 1)
        self.assertEqual(summary["files"], 2)

    def test_missing_directory(self):
        with self.assertRaises(FileNotFoundError):
            process_batch.process_directory(self.tmp / "nope", self.out_dir)


if __name__ == "__main__":
    unittest.main()
