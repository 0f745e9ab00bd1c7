"""Property-based tests for itinerary normalization."""

import json

from hypothesis import given
from hypothesis import strategies as st

from tour_catalog.services.tour_service import normalize_itinerary

days = st.lists(
    st.fixed_dictionaries(
        {},
        optional={
            "title": st.one_of(st.none(), st.text(max_size=40)),
            "description": st.one_of(st.none(), st.text(max_size=200)),
            "meals": st.text(max_size=10),
        },
    ),
    max_size=15,
)


@given(raw=days)
def test_every_day_has_exactly_title_and_description(raw):
    normalized = normalize_itinerary(json.dumps(raw))

    assert len(normalized) == len(raw)
    for day in normalized:
        assert set(day) == {"title", "description"}
        assert isinstance(day["title"], str)
        assert isinstance(day["description"], str)


@given(raw=days)
def test_normalization_is_idempotent(raw):
    once = normalize_itinerary(raw)
    assert normalize_itinerary(once) == once
    assert normalize_itinerary(json.dumps(once)) == once


@given(raw=st.lists(st.one_of(st.integers(), st.text(max_size=20), st.booleans()), max_size=10))
def test_scalar_days_keep_their_positions(raw):
    normalized = normalize_itinerary(json.dumps(raw))

    assert normalized == [{"title": "", "description": ""}] * len(raw)
