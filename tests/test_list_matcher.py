"""Tests for ranking task lists against project identifiers."""

from check_tasks_hook.lib.list_matcher import (
    is_canonical_list_id,
    rank_task_lists,
    score_task_list,
)

UUID_LIST = "a1b2c3d4-e5f6-7890-abcd-1234567890ab"


def test_prefix_match_only_keeps_project_lists():
    lists = ["platform-alumia-dev", "foo-dev", UUID_LIST]
    assert rank_task_lists(lists, ["platform-alumia"]) == ["platform-alumia-dev"]


def test_canonical_ids_detected():
    assert is_canonical_list_id(UUID_LIST)
    assert is_canonical_list_id(UUID_LIST.upper())
    assert not is_canonical_list_id("myproject-dev")
    assert not is_canonical_list_id("a1b2c3d4-e5f6-7890-abcd-1234567890")


def test_canonical_list_never_matches_even_if_named_like_identifier():
    assert rank_task_lists([UUID_LIST], [UUID_LIST]) == []


def test_exact_match_outranks_prefix_match():
    lists = ["shop-dev", "shop"]
    assert rank_task_lists(lists, ["shop"]) == ["shop", "shop-dev"]


def test_closer_identifier_outranks_ancestor():
    lists = ["acme-dev", "acme-billing-dev"]
    identifiers = ["acme-billing", "acme"]
    assert score_task_list("acme-billing-dev", identifiers) == 20
    assert score_task_list("acme-dev", identifiers) == 10
    assert rank_task_lists(lists, identifiers) == ["acme-billing-dev", "acme-dev"]


def test_ancestor_exact_match_beats_leaf_prefix_match():
    # 1 * 100 for the exact ancestor match vs 2 * 10 for the leaf prefix
    assert rank_task_lists(["billing-dev", "acme"], ["billing", "acme"]) == ["acme", "billing-dev"]


def test_case_insensitive():
    assert rank_task_lists(["MyProject-Dev"], ["myproject"]) == ["MyProject-Dev"]


def test_ties_keep_enumeration_order():
    lists = ["shop-plan", "shop-dev", "shop-bugs"]
    assert rank_task_lists(lists, ["shop"]) == lists


def test_name_containing_identifier_is_not_a_match():
    assert rank_task_lists(["myshop-dev", "shopping-dev"], ["shop"]) == []


def test_no_identifiers_or_no_lists():
    assert rank_task_lists(["shop-dev"], []) == []
    assert rank_task_lists([], ["shop"]) == []
    assert rank_task_lists([UUID_LIST], ["shop"]) == []
