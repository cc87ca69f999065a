"""Listing filter: search term and location matching."""

import pytest

from plantswap.modules.listings.domain.models.plant import Plant
from plantswap.modules.listings.domain.services.listing_filter import (
    filter_listings,
    matches_location,
    matches_search,
)


def _plant(pid, name, species="Ficus lyrata", description=None, location="Berlin"):
    return Plant(
        id=pid,
        owner_id="owner",
        name=name,
        species=species,
        description=description,
        location=location,
    )


@pytest.fixture()
def listings():
    return [
        _plant("1", "Monstera", "Monstera deliciosa", "Big split leaves", "Berlin Mitte"),
        _plant("2", "Snake plant", "Dracaena trifasciata", None, "Hamburg"),
        _plant("3", "Basil", "Ocimum basilicum", "Smells like pesto", "berlin"),
        _plant("4", "Golden Pothos", "Epipremnum aureum", "Trailing MONSTER of a vine", "Munich"),
    ]


@pytest.mark.parametrize("search,location", [(None, None), ("", ""), (None, ""), ("", None)])
def test_empty_filters_return_everything_in_order(listings, search, location):
    assert filter_listings(listings, search, location) == listings


def test_search_matches_name_species_or_description_case_insensitively(listings):
    result = filter_listings(listings, search_term="MONSTER")

    # name of 1, description of 4
    assert [p.id for p in result] == ["1", "4"]


def test_search_on_species(listings):
    assert [p.id for p in filter_listings(listings, "dracaena")] == ["2"]


def test_missing_description_never_matches(listings):
    assert not matches_search(listings[1], "pesto")
    assert matches_search(listings[2], "pesto")


def test_location_is_a_substring_match(listings):
    assert [p.id for p in filter_listings(listings, location="BERLIN")] == ["1", "3"]
    assert matches_location(listings[0], " mitte")
    assert not matches_location(listings[0], " mitte ")


def test_terms_are_matched_as_typed_without_trimming():
    snake = _plant("s", "Snake plant", species="x")
    fern = _plant("f", "Fern", species="Nephrolepis", location="Hamburg")

    assert filter_listings([snake], "plant ") == []
    assert filter_listings([snake], "snake p") == [snake]
    assert filter_listings([fern], " ") == []
    assert filter_listings([fern], location="\t") == []


def test_both_filters_must_match(listings):
    assert [p.id for p in filter_listings(listings, "basil", "berlin")] == ["3"]
    assert filter_listings(listings, "basil", "hamburg") == []


def test_filter_is_idempotent(listings):
    once = filter_listings(listings, "o", "b")
    assert filter_listings(once, "o", "b") == once


def test_accepts_any_iterable(listings):
    assert filter_listings(iter(listings), "snake") == [listings[1]]
