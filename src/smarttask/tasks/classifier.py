# src/smarttask/tasks/classifier.py

"""
Keyword classifier.

Turns raw task text into a priority level and a set of category tags.
Runs once per task, at creation time. Pure functions only.
"""

from __future__ import annotations

import re

from .task_models import Priority

# Ordered highest severity first; the first level with any keyword hit wins.
# Low has no keywords: it is the fallback.
PRIORITY_KEYWORDS: dict[Priority, frozenset[str]] = {
    Priority.HIGH: frozenset(
        {"urgent", "asap", "important", "deadline", "exam", "final", "must", "alert", "crisis"}
    ),
    Priority.MEDIUM: frozenset(
        {"call", "email", "meeting", "review", "buy", "shop", "prepare", "discuss"}
    ),
    Priority.LOW: frozenset(),
}

TAG_MAPPING: dict[str, str] = {
    "study": "Education",
    "exam": "Academic",
    "meeting": "Work",
    "project": "Work",
    "office": "Work",
    "gym": "Health",
    "workout": "Health",
    "run": "Health",
    "buy": "Shopping",
    "grocery": "Errands",
    "shop": "Shopping",
    "dinner": "Personal",
    "family": "Personal",
}

_TOKEN_RE = re.compile(r"[^\W_]+")


def tokenize(text: str) -> list[str]:
    """Lower-cased alphanumeric words; punctuation around a word is dropped."""
    return _TOKEN_RE.findall((text or "").lower())


def _word_forms(token: str) -> set[str]:
    # Simple plural folding so "groceries" hits "grocery" and "meetings" hits "meeting".
    forms = {token}
    if len(token) > 3 and token.endswith("ies"):
        forms.add(token[:-3] + "y")
    if len(token) > 2 and token.endswith("es"):
        forms.add(token[:-2])
    if len(token) > 1 and token.endswith("s"):
        forms.add(token[:-1])
    return forms


def _vocabulary(text: str) -> set[str]:
    vocab: set[str] = set()
    for token in tokenize(text):
        vocab |= _word_forms(token)
    return vocab


def determine_priority(text: str) -> Priority:
    vocab = _vocabulary(text)
    for level, keywords in PRIORITY_KEYWORDS.items():
        if keywords & vocab:
            return level
    return Priority.LOW


def determine_tags(text: str) -> list[str]:
    tags: list[str] = []
    for token in tokenize(text):
        for form in sorted(_word_forms(token)):
            category = TAG_MAPPING.get(form)
            if category and category not in tags:
                tags.append(category)
    return tags


def classify(text: str) -> tuple[Priority, list[str]]:
    return determine_priority(text), determine_tags(text)


def capitalize(text: str) -> str:
    """Upper-case the first character only; the rest is left untouched."""
    if not text:
        return text
    return text[0].upper() + text[1:]
