#!/usr/bin/env python3
"""Rank stored task lists against a project's identifiers.

Scoring, case-insensitive, best identifier wins:
- list name == identifier              -> weight * 100
- list name starts with identifier-    -> weight * 10

where ``weight = len(identifiers) - position``, so identifiers closer to the
working directory outrank ancestor directory names.
"""

from __future__ import annotations

import re

CANONICAL_LIST_ID = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$",
    re.IGNORECASE,
)

EXACT_MATCH_MULTIPLIER = 100
PREFIX_MATCH_MULTIPLIER = 10


def is_canonical_list_id(name: str) -> bool:
    """True for auto-generated list names (8-4-4-4-12 hex groups)."""
    return bool(CANONICAL_LIST_ID.match(name))


def score_task_list(name: str, identifiers: list[str]) -> int:
    """Score one list name against the identifiers (0 = no match)."""
    name_lower = name.lower()
    count = len(identifiers)
    best = 0
    for position, identifier in enumerate(identifiers):
        weight = count - position
        ident_lower = identifier.lower()
        if name_lower == ident_lower:
            score = weight * EXACT_MATCH_MULTIPLIER
        elif name_lower.startswith(ident_lower + "-"):
            score = weight * PREFIX_MATCH_MULTIPLIER
        else:
            score = 0
        best = max(best, score)
    return best


def rank_task_lists(list_names: list[str], identifiers: list[str]) -> list[str]:
    """Return the matching list names, best match first.

    Canonical-id lists are never matched. Ties keep the input order.
    """
    named = [name for name in list_names if not is_canonical_list_id(name)]
    if not named or not identifiers:
        return []

    scored = [(name, score_task_list(name, identifiers)) for name in named]
    matches = [(name, score) for name, score in scored if score > 0]
    matches.sort(key=lambda item: item[1], reverse=True)
    return [name for name, _ in matches]
