"""
Tests for the dashboard ViewState reducer.
"""

import pytest

from baroform.view_state import (
    ClearSelection,
    GoToPage,
    SetDateRange,
    SetFilter,
    SetQuery,
    SetTab,
    ToggleSelect,
    ToggleSelectAll,
    ViewState,
    action_from_json,
    reduce,
)


class TestPageReset:
    """Changing what is filtered always starts again from page 1."""

    def test_query_resets_page(self):
        state = ViewState(page=3)
        assert reduce(state, SetQuery("홍")).page == 1

    def test_filter_resets_page(self):
        state = ViewState(page=2)
        new = reduce(state, SetFilter("status", "상담중"))
        assert new.page == 1
        assert new.status == "상담중"

    def test_date_range_resets_page(self):
        new = reduce(ViewState(page=4), SetDateRange("2024-03-01", "2024-03-31"))
        assert (new.start_date, new.end_date, new.page) == ("2024-03-01", "2024-03-31", 1)

    def test_tab_resets_page_and_selection(self):
        state = ViewState(page=2, selected=frozenset({1, 2}))
        new = reduce(state, SetTab("practice"))
        assert new.tab == "practice"
        assert new.page == 1
        assert new.selected == frozenset()

    def test_unknown_filter_rejected(self):
        with pytest.raises(ValueError):
            reduce(ViewState(), SetFilter("manager", "x"))

    def test_unknown_tab_rejected(self):
        with pytest.raises(ValueError):
            reduce(ViewState(), SetTab("other"))


class TestSelection:

    def test_toggle_single(self):
        state = reduce(ViewState(), ToggleSelect(5))
        assert state.selected == frozenset({5})
        assert reduce(state, ToggleSelect(5)).selected == frozenset()

    def test_select_all_toggles(self):
        page_ids = (1, 2, 3)
        state = reduce(ViewState(), ToggleSelectAll(page_ids))
        assert state.selected == frozenset(page_ids)
        assert reduce(state, ToggleSelectAll(page_ids)).selected == frozenset()

    def test_select_all_replaces_partial_selection(self):
        state = ViewState(selected=frozenset({2}))
        assert reduce(state, ToggleSelectAll((1, 2, 3))).selected == frozenset({1, 2, 3})

    def test_go_to_page_clears_selection(self):
        state = ViewState(selected=frozenset({1}))
        new = reduce(state, GoToPage(2))
        assert new.page == 2
        assert new.selected == frozenset()

    def test_clear_selection(self):
        state = ViewState(selected=frozenset({1, 2}))
        assert reduce(state, ClearSelection()).selected == frozenset()

    def test_bulk_affordances(self):
        none = ViewState()
        one = ViewState(selected=frozenset({1}))
        two = ViewState(selected=frozenset({1, 2}))
        assert (none.can_edit, none.can_delete, none.can_export) == (False, False, False)
        assert (one.can_edit, one.can_delete, one.can_export) == (True, True, True)
        assert (two.can_edit, two.can_delete, two.can_export) == (False, True, True)


class TestSerialization:

    def test_round_trip_through_dict(self):
        state = ViewState(tab="취업연계", query="010", page=2, selected=frozenset({3, 1}))
        assert ViewState.from_dict(state.to_dict()) == state

    def test_from_empty(self):
        assert ViewState.from_dict(None) == ViewState()

    def test_action_from_json(self):
        assert action_from_json({"type": "set_query", "query": "김"}) == SetQuery("김")
        assert action_from_json({"type": "go_to_page", "page": "3"}) == GoToPage(3)
        assert action_from_json({"type": "toggle_select_all", "page_ids": [1, 2]}) == ToggleSelectAll((1, 2))

    def test_action_from_json_rejects_unknown(self):
        with pytest.raises(ValueError):
            action_from_json({"type": "explode"})
        with pytest.raises(ValueError):
            action_from_json({"type": "set_query", "bogus": 1})

    def test_action_from_json_rejects_wrong_types(self):
        bad = [
            {"type": "set_query", "query": 123},
            {"type": "set_filter", "name": "status", "value": ["상담중"]},
            {"type": "set_date_range", "start_date": 20240315},
            {"type": "set_tab", "tab": None},
            {"type": "toggle_select", "id": {"x": 1}},
            {"type": "toggle_select", "id": True},
            {"type": "toggle_select_all", "page_ids": "1,2"},
            {"type": "toggle_select_all", "page_ids": [1, [2]]},
        ]
        for data in bad:
            with pytest.raises(ValueError):
                action_from_json(data)

    @pytest.mark.parametrize("page", [None, "x", [2], {"n": 1}])
    def test_bad_page_is_value_error(self, page):
        with pytest.raises(ValueError):
            action_from_json({"type": "go_to_page", "page": page})
