"""Unit tests for {{expr}} template substitution."""

from __future__ import annotations

from dicebag.config import settings
from dicebag.sampler import Sampler
from dicebag.substitution import roll_string


def test_single_placeholder(sampler: Sampler) -> None:
    assert roll_string("This should be {{1d1+3}}.", sampler) == "This should be 4."


def test_multiple_placeholders(sampler: Sampler) -> None:
    text = "This should be {{1d1+3}} and {{2d1}}. Right?"
    assert roll_string(text, sampler) == "This should be 4 and 2. Right?"


def test_whitespace_inside_braces(sampler: Sampler) -> None:
    assert roll_string("Total: {{ 3d1-1 }}", sampler) == "Total: 2"


def test_pair_placeholder(sampler: Sampler) -> None:
    assert roll_string("{{2d1+3-1d1}}", sampler) == "4"


def test_no_placeholder_unchanged(sampler: Sampler) -> None:
    assert roll_string("This should be the same!", sampler) == "This should be the same!"


def test_invalid_placeholder_unchanged(sampler: Sampler) -> None:
    text = "This should be {{1dbroke}} the same!"
    assert roll_string(text, sampler) == text


def test_bare_expression_not_substituted(sampler: Sampler) -> None:
    assert roll_string("Roll 1d1+3 please", sampler) == "Roll 1d1+3 please"


def test_oversized_placeholder_unchanged(monkeypatch, sampler: Sampler) -> None:
    monkeypatch.setattr(settings, "max_sides", 1000)
    text = "{{1d" + "9" * 30 + "}}"
    assert roll_string(text, sampler) == text


def test_substitution_cap(monkeypatch, sampler: Sampler) -> None:
    monkeypatch.setattr(settings, "max_substitutions", 2)
    text = "{{1d1}} {{2d1}} {{3d1}}"
    assert roll_string(text, sampler) == "1 2 {{3d1}}"


def test_without_sampler() -> None:
    assert roll_string("{{4d1}}") == "4"
