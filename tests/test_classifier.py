# tests/test_classifier.py

from __future__ import annotations

import pytest

from smarttask.tasks.classifier import (
    PRIORITY_KEYWORDS,
    capitalize,
    classify,
    determine_priority,
    determine_tags,
    tokenize,
)
from smarttask.tasks.task_models import Priority


def test_urgent_exam_is_high_and_academic() -> None:
    priority, tags = classify("URGENT exam tomorrow")
    assert priority == Priority.HIGH
    assert "Academic" in tags


def test_buy_groceries_uses_fixed_tables() -> None:
    # "buy" sits in the Medium keyword set; plural "groceries" still maps to Errands.
    priority, tags = classify("Buy groceries")
    assert priority == Priority.MEDIUM
    assert set(tags) == {"Shopping", "Errands"}


def test_high_wins_over_medium() -> None:
    assert determine_priority("call the client before the deadline") == Priority.HIGH
    assert determine_priority("urgent: call client") == Priority.HIGH


@pytest.mark.parametrize("word", sorted(PRIORITY_KEYWORDS[Priority.HIGH]))
def test_every_high_keyword(word: str) -> None:
    assert determine_priority(f"something {word} here") == Priority.HIGH


@pytest.mark.parametrize("word", sorted(PRIORITY_KEYWORDS[Priority.MEDIUM]))
def test_every_medium_keyword(word: str) -> None:
    assert determine_priority(f"please {word} soon") == Priority.MEDIUM


def test_unrecognized_text_is_low_without_tags() -> None:
    assert classify("Read a novel") == (Priority.LOW, [])


def test_punctuation_does_not_block_match() -> None:
    assert classify("meeting!!") == (Priority.MEDIUM, ["Work"])
    assert determine_tags("(gym), then dinner.") == ["Health", "Personal"]
    assert determine_priority("...ASAP...") == Priority.HIGH


def test_keywords_are_whole_words() -> None:
    # "examine" is not "exam", "shopping" is not "shop"
    assert classify("examine the shopping list") == (Priority.LOW, [])


def test_duplicate_categories_collapse() -> None:
    assert determine_tags("meeting about the project at the office") == ["Work"]


def test_case_insensitive() -> None:
    assert determine_tags("GYM Workout") == ["Health"]


def test_tokenize_strips_punctuation() -> None:
    assert tokenize("Hello, world! (urgent)") == ["hello", "world", "urgent"]
    assert tokenize("") == []


def test_capitalize_only_first_letter() -> None:
    assert capitalize("buy milk") == "Buy milk"
    assert capitalize("iPhone repair") == "IPhone repair"
    assert capitalize("call NASA") == "Call NASA"
    assert capitalize("") == ""
