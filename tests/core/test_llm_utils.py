"""
Tests for core/llm_utils.py - LLM response normalization
"""
from types import SimpleNamespace

from curio.core.llm_utils import extract_content_as_string, normalize_content_to_string, strip_code_fence


class TestExtractContent:

    def test_string_content(self):
        assert extract_content_as_string(SimpleNamespace(content="hello")) == "hello"

    def test_gemini_content_blocks(self):
        response = SimpleNamespace(content=[{"type": "text", "text": "IDENTIFIED:"}, " Go | Programming"])

        assert extract_content_as_string(response) == "IDENTIFIED:  Go | Programming"

    def test_dict_block(self):
        assert normalize_content_to_string({"content": "x"}) == "x"

    def test_empty(self):
        assert normalize_content_to_string(None) == ""


class TestStripCodeFence:

    def test_json_fence(self):
        assert strip_code_fence('```json\n[{"a": 1}]\n```') == '[{"a": 1}]'

    def test_bare_fence(self):
        assert strip_code_fence("```\n[]\n```") == "[]"

    def test_uppercase_language_tag(self):
        assert strip_code_fence("```JSON\n[]\n```") == "[]"

    def test_no_fence(self):
        assert strip_code_fence('  [{"a": 1}]\n') == '[{"a": 1}]'
