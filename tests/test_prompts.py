"""Unit tests for the prompt collaborator (configure_package.prompts).

Tests cover:
- is_answer_yes / is_answer_no
- ask defaults on blank input and EOF
- ask_boolean defaults and parsing
- conditional_ask re-asking for required values
"""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any
from unittest.mock import MagicMock

import pytest

from configure_package.prompts import Prompter, is_answer_no, is_answer_yes


class TestAnswerParsing:
    @pytest.mark.unit
    @pytest.mark.parametrize("answer", ["y", "Y", "yes", "  Yes please "])
    def test_yes(self, answer: str):
        assert is_answer_yes(answer)
        assert not is_answer_no(answer)

    @pytest.mark.unit
    @pytest.mark.parametrize("answer", ["n", "N", "no", " nope"])
    def test_no(self, answer: str):
        assert is_answer_no(answer)
        assert not is_answer_yes(answer)

    @pytest.mark.unit
    def test_blank_is_neither(self):
        assert not is_answer_yes("")
        assert not is_answer_no("")


class TestAsk:
    @pytest.mark.unit
    def test_returns_answer(self, scripted_prompter: Any):
        assert scripted_prompter(["widgets"]).ask("package name?", "x") == "widgets"

    @pytest.mark.unit
    def test_blank_returns_default(self, scripted_prompter: Any):
        prompter = scripted_prompter(["   "])
        assert prompter.ask("package name?", "my-package") == "my-package"
        assert prompter.prompts == ["» package name? (my-package) "]

    @pytest.mark.unit
    def test_no_default_no_suffix(self, scripted_prompter: Any):
        prompter = scripted_prompter(["a"])
        prompter.ask("description?")
        assert prompter.prompts == ["» description? "]

    @pytest.mark.unit
    def test_eof_returns_default(self):
        console = MagicMock()
        console.input.side_effect = EOFError
        assert Prompter(console).ask("name?", "fallback") == "fallback"

    @pytest.mark.unit
    def test_reads_through_console(self):
        console = MagicMock()
        console.input.return_value = "typed"
        assert Prompter(console).ask("name?") == "typed"
        console.input.assert_called_once_with("» name? ")


class TestAskBoolean:
    @pytest.mark.unit
    @pytest.mark.parametrize(
        "answer,default,expected",
        [
            ("", True, True),
            ("", False, False),
            ("y", False, True),
            ("yes", False, True),
            ("n", True, False),
            ("maybe", True, False),
        ],
    )
    def test_answers(self, scripted_prompter: Any, answer: str, default: bool, expected: bool):
        assert scripted_prompter([answer]).ask_boolean("Use it?", default) is expected

    @pytest.mark.unit
    def test_suffix_reflects_default(self, scripted_prompter: Any):
        prompter = scripted_prompter([])
        prompter.ask_boolean("A?", True)
        prompter.ask_boolean("B?", False)
        assert "Y/n]" in prompter.prompts[0]
        assert "y/N]" in prompter.prompts[1]


class TestConditionalAsk:
    @pytest.mark.unit
    def test_keeps_prefilled_value_on_blank(self, scripted_prompter: Any):
        obj = SimpleNamespace(name="prefilled")
        assert scripted_prompter([""]).conditional_ask(obj, "name", "name?") == "prefilled"
        assert obj.name == "prefilled"

    @pytest.mark.unit
    def test_required_value_asked_until_given(self, scripted_prompter: Any):
        obj = SimpleNamespace(email="")
        prompter = scripted_prompter(["", "  ", "sam@example.com"])
        assert prompter.conditional_ask(obj, "email", "email?") == "sam@example.com"
        assert len(prompter.prompts) == 3

    @pytest.mark.unit
    def test_allow_empty(self, scripted_prompter: Any):
        obj = SimpleNamespace(github="")
        prompter = scripted_prompter([""])
        assert prompter.conditional_ask(obj, "github", "vendor?", allow_empty=True) == ""
        assert len(prompter.prompts) == 1
