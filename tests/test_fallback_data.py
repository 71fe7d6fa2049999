from __future__ import annotations

from crisis_assistant.fallback_data import FALLBACK_CHARITIES, find_by_slug


def test_fallback_dataset_is_well_formed() -> None:
    ids = [charity.id for charity in FALLBACK_CHARITIES]
    slugs = [charity.slug for charity in FALLBACK_CHARITIES]

    assert len(FALLBACK_CHARITIES) == 18
    assert len(set(ids)) == len(ids)
    assert len(set(slugs)) == len(slugs)
    assert all(70 <= charity.trust_score <= 100 for charity in FALLBACK_CHARITIES)
    assert all(charity.causes and charity.description for charity in FALLBACK_CHARITIES)


def test_find_by_slug() -> None:
    assert find_by_slug("red-cross").name == "International Red Cross"
    assert find_by_slug("does-not-exist") is None
