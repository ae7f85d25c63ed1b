"""
Tests for dialogue/parsing.py - Tagged reply validation
"""
from curio.dialogue.parsing import parse_preference, parse_tagged_reply
from curio.storage.schemas import LearningPreference


class TestParseTaggedReply:

    def test_value_and_detail(self):
        reply = parse_tagged_reply("IDENTIFIED: Machine Learning | Computer Science", ("IDENTIFIED", "CLARIFY"))

        assert reply.tag == "IDENTIFIED"
        assert reply.value == "Machine Learning"
        assert reply.detail == "Computer Science"

    def test_detail_may_contain_commas(self):
        reply = parse_tagged_reply("CLARIFY: Swift | Programming Language, Bird Species", ("IDENTIFIED", "CLARIFY"))

        assert reply.tag == "CLARIFY"
        assert reply.detail == "Programming Language, Bird Species"

    def test_tag_is_case_insensitive(self):
        reply = parse_tagged_reply("resolved: Python | Programming Language", "RESOLVED")

        assert reply is not None
        assert reply.tag == "RESOLVED"

    def test_first_matching_line_wins(self):
        text = "Let me think.\nRESOLVED: Python | Animal/Biology\nRESOLVED: Java | Programming"

        assert parse_tagged_reply(text, "RESOLVED").value == "Python"

    def test_empty_value_is_rejected(self):
        assert parse_tagged_reply("IDENTIFIED:  | Computer Science", "IDENTIFIED") is None

    def test_bracketed_value_and_detail(self):
        reply = parse_tagged_reply("RESOLVED: [Python] | [Programming Language].", "RESOLVED")

        assert reply.value == "Python"
        assert reply.detail == "Programming Language"

    def test_empty_detail_becomes_none(self):
        assert parse_tagged_reply("IDENTIFIED: Rust |  ", "IDENTIFIED").detail is None

    def test_no_matching_tag(self):
        assert parse_tagged_reply("UNCLEAR", ("IDENTIFIED", "CLARIFY")) is None
        assert parse_tagged_reply("", "RESOLVED") is None
        assert parse_tagged_reply(None, "RESOLVED") is None


class TestParsePreference:

    def test_known_values(self):
        assert parse_preference("PREFERENCE: basics") == LearningPreference.BASICS
        assert parse_preference("PREFERENCE: getting_started") == LearningPreference.GETTING_STARTED
        assert parse_preference("PREFERENCE: core_concepts") == LearningPreference.CORE_CONCEPTS

    def test_normalizes_case_and_separators(self):
        assert parse_preference("PREFERENCE: Core-Concepts") == LearningPreference.CORE_CONCEPTS
        assert parse_preference("`PREFERENCE: BASICS`") == LearningPreference.BASICS

    def test_trailing_punctuation_and_brackets(self):
        assert parse_preference("PREFERENCE: basics.") == LearningPreference.BASICS
        assert parse_preference("PREFERENCE: [getting_started]") == LearningPreference.GETTING_STARTED

    def test_unknown_value(self):
        assert parse_preference("PREFERENCE: advanced") is None

    def test_missing_tag(self):
        assert parse_preference("basics") is None
