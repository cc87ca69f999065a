# 📄 File: plantswap/modules/listings/domain/services/listing_filter.py
# 🧭 Purpose (Layman Explanation):
# Narrows a list of plants down to the ones matching what the visitor typed in the search box
# and the place they are interested in.
# 🧪 Purpose (Technical Summary):
# Pure, synchronous, idempotent predicate filter over an in-memory plant collection.
# Case-insensitive substring matching with the term taken as typed; input order is preserved;
# a missing or empty term matches everything.
# 🔗 Dependencies:
# Plant domain model
# 🔄 Connected Modules / Calls From:
# PlantService.browse, plants API

from typing import Iterable, List, Optional

from ..models.plant import Plant


def _normalize(term: Optional[str]) -> str:
    # Not stripped: " " is a real search for a space
    return (term or "").lower()


def matches_search(plant: Plant, search_term: Optional[str]) -> bool:
    """True if the term is empty or found in name, species or description."""
    term = _normalize(search_term)
    if not term:
        return True
    haystacks = (plant.name, plant.species, plant.description or "")
    return any(term in value.lower() for value in haystacks)


def matches_location(plant: Plant, location: Optional[str]) -> bool:
    """True if the location filter is empty or found in the plant's location."""
    term = _normalize(location)
    if not term:
        return True
    return term in (plant.location or "").lower()


def filter_listings(
    plants: Iterable[Plant],
    search_term: Optional[str] = None,
    location: Optional[str] = None,
) -> List[Plant]:
    """
    Keep plants matching both the search term and the location filter.

    Args:
        plants: Plants in display order
        search_term: Free text matched against name, species and description
        location: Free text matched against location

    Returns:
        Matching plants in their original order
    """
    return [
        plant for plant in plants
        if matches_search(plant, search_term) and matches_location(plant, location)
    ]
