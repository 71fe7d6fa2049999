from __future__ import annotations

import pytest

from crisis_assistant.mapper import (
    DEFAULT_NEEDS,
    DESCRIPTION_PLACEHOLDER,
    calculate_trust_score,
    extract_countries,
    infer_addressed_needs,
    infer_causes_from_description,
    is_irrelevant_organization,
    map_nonprofit_to_charity,
    map_ntee_code_to_causes,
    normalize_api_record,
)


def test_normalize_prefers_address_and_first_category() -> None:
    record = normalize_api_record(
        {
            "slug": "helping-hands",
            "name": "Helping Hands",
            "location": "Austin, TX",
            "categories": ["Disaster Relief", "Education"],
            "logoUrl": "https://cdn.example.org/logo.png",
        }
    )

    assert record["locationAddress"] == "Austin, TX"
    assert record["primaryCategory"] == "Disaster Relief"
    assert record["logoUrl"] == "https://cdn.example.org/logo.png"
    assert record["description"] == ""
    assert "ein" not in record


def test_normalize_keeps_explicit_location_address() -> None:
    record = normalize_api_record({"slug": "x", "name": "X", "locationAddress": "Nairobi", "location": "Other"})
    assert record["locationAddress"] == "Nairobi"


@pytest.mark.parametrize(
    ("code", "causes"),
    [
        ("M20", ["disaster_relief"]),
        ("m20", ["disaster_relief"]),
        ("M31", ["disaster_relief", "humanitarian_crisis"]),
        ("E32", ["health_crisis"]),
        ("Z99", []),
        (None, []),
    ],
)
def test_map_ntee_code_to_causes(code, causes) -> None:
    assert map_ntee_code_to_causes(code) == causes


def test_infer_causes_needs_two_keyword_hits() -> None:
    assert infer_causes_from_description("Disaster relief and emergency response") == ["disaster_relief"]
    assert infer_causes_from_description("We clean up after a flood") == []
    assert infer_causes_from_description("") == []


def test_infer_addressed_needs() -> None:
    assert infer_addressed_needs("We fund schools and teaching") == ["education"]
    assert infer_addressed_needs("Clean water and meals", "Food Banks") == ["food", "water"]
    assert infer_addressed_needs("") == DEFAULT_NEEDS


@pytest.mark.parametrize(
    ("location", "name", "description", "countries"),
    [
        (None, None, None, ["Global"]),
        ("Juba, South Sudan", None, None, ["SSD"]),
        ("Khartoum, Sudan", None, None, ["SDN"]),
        ("Kyiv", "Ukrainian Aid Fund", None, ["UKR"]),
        ("Springfield, IL", "Helping Hands", None, ["USA"]),
        (None, "World Relief", "Serving the campus", ["Global"]),
        (None, "Helping Hands", "Local help", ["Global"]),
    ],
)
def test_extract_countries(location, name, description, countries) -> None:
    assert extract_countries(location, name, description) == countries


def test_trust_score_bounds() -> None:
    assert calculate_trust_score({"slug": "x", "name": "X", "description": ""}) == 70
    complete = {
        "slug": "x",
        "name": "X",
        "description": "d" * 101,
        "ein": "12-3456789",
        "logoUrl": "logo.png",
        "websiteUrl": "https://x.org",
        "locationAddress": "Somewhere",
        "nteeCode": "M20",
    }
    assert calculate_trust_score(complete) == 100


def test_animal_organizations_are_irrelevant() -> None:
    assert is_irrelevant_organization({"name": "Paws", "description": "", "nteeCode": "D20"})
    assert is_irrelevant_organization({"name": "Happy Tails", "description": "Adopt dogs and cats"})
    assert not is_irrelevant_organization(
        {"name": "Rescue Team", "description": "Rescues dogs and people after a disaster"}
    )


def test_arts_and_domestic_healthcare_are_irrelevant() -> None:
    assert is_irrelevant_organization({"name": "City Opera", "description": "", "nteeCode": "A6A"})
    assert is_irrelevant_organization({"name": "Springfield Hospital", "description": "Primary care"})
    assert not is_irrelevant_organization(
        {"name": "Field Hospital Network", "description": "Emergency response for refugees"}
    )


def test_acronym_confusion_is_filtered_for_long_searches() -> None:
    record = {"name": "DWB Inc", "description": "Consulting"}
    assert is_irrelevant_organization(record, "Doctors Without Borders")
    assert not is_irrelevant_organization(record, None)


def test_map_nonprofit_to_charity_defaults() -> None:
    charity = map_nonprofit_to_charity({"slug": "helping-hands", "name": "Helping Hands", "description": "  "})

    assert charity.id == charity.slug == "helping-hands"
    assert charity.description == DESCRIPTION_PLACEHOLDER
    assert charity.causes == ["humanitarian_crisis"]
    assert charity.countries == ["Global"]
    assert charity.geographic_flexibility == 10
    assert charity.logo == "/placeholder.svg"
    assert charity.verified is True
    assert charity.data_source == "Every.org"


def test_map_nonprofit_to_charity_merges_causes_without_duplicates() -> None:
    charity = map_nonprofit_to_charity(
        {
            "slug": "texas-relief",
            "name": "Texas Relief",
            "description": "Disaster relief and emergency rescue",
            "nteeCode": "M20",
            "locationAddress": "Houston, TX",
        }
    )

    assert charity.causes == ["disaster_relief"]
    assert charity.countries == ["USA"]
    assert charity.geographic_flexibility == 8
    assert "rescue" in charity.addressed_needs
    assert charity.ntee_code == "M20"
