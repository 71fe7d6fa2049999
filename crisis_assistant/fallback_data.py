"""Vetted organizations bundled for use when live retrieval is unavailable."""
from __future__ import annotations

from typing import List, Optional, Sequence

from .models import Charity


def _charity(
    id: str,
    name: str,
    slug: str,
    description: str,
    trust_score: int,
    causes: List[str],
    countries: List[str],
    addressed_needs: List[str],
    vetting_level: str,
    geographic_flexibility: int,
    category: Optional[str] = None,
) -> Charity:
    return Charity(
        id=id,
        name=name,
        slug=slug,
        description=description,
        trust_score=trust_score,
        causes=causes,
        countries=countries,
        addressed_needs=addressed_needs,
        vetting_level=vetting_level,
        geographic_flexibility=geographic_flexibility,
        category=category,
        location="Global" if "Global" in countries else ", ".join(countries),
        verified=True,
        data_source="curated",
    )


FALLBACK_CHARITIES: List[Charity] = [
    _charity(
        "dr-001", "International Red Cross", "red-cross",
        "Provides immediate emergency relief to communities affected by natural disasters worldwide.",
        95, ["disaster_relief"], ["Global"], ["shelter", "food", "water", "rescue", "medical"],
        "partner_pg_review", 5, "Disaster Relief",
    ),
    _charity(
        "dr-002", "Direct Relief", "direct-relief",
        "Improves the health and lives of people affected by poverty and emergencies.",
        92, ["disaster_relief"], ["USA", "CAN", "MEX"], ["rescue", "medical", "shelter"],
        "partner_pg_review", 2, "Disaster Relief",
    ),
    _charity(
        "dr-003", "Habitat for Humanity", "habitat-humanity",
        "Helps families rebuild homes and lives after disasters through volunteer construction.",
        90, ["disaster_relief"], ["Global"], ["shelter", "education"],
        "partner_only", 4, "Housing",
    ),
    _charity(
        "hc-001", "Doctors Without Borders", "doctors-without-borders",
        "Delivers emergency medical care to people affected by conflict, epidemics, disasters, "
        "or exclusion from healthcare.",
        96, ["health_crisis"], ["Global"], ["medical", "water", "sanitation"],
        "pg_direct", 5, "Health",
    ),
    _charity(
        "hc-002", "UNICEF", "unicef",
        "Works in the world's toughest places to reach the most disadvantaged children and adolescents.",
        94, ["health_crisis"], ["Global"], ["medical", "education", "water"],
        "partner_pg_review", 5, "Children",
    ),
    _charity(
        "hc-003", "Partners In Health", "partners-in-health",
        "Provides high-quality healthcare to the world's poorest communities.",
        93, ["health_crisis"], ["Global"], ["medical", "mental_health", "education"],
        "partner_pg_review", 4, "Health",
    ),
    _charity(
        "ce-001", "The Nature Conservancy", "nature-conservancy",
        "Works to protect ecologically important lands and waters for nature and people.",
        93, ["climate_events"], ["Global"], ["shelter", "food", "water", "education"],
        "partner_pg_review", 4, "Environment",
    ),
    _charity(
        "ce-002", "American Red Cross", "american-red-cross",
        "Prevents and alleviates human suffering in the face of emergencies including wildfires.",
        91, ["climate_events", "disaster_relief"], ["USA"], ["shelter", "rescue", "mental_health"],
        "partner_pg_review", 1, "Disaster Relief",
    ),
    _charity(
        "ce-003", "Ocean Conservancy", "ocean-conservancy",
        "Works to protect the ocean from today's greatest global challenges.",
        89, ["climate_events"], ["Global"], ["shelter", "water", "food", "education"],
        "partner_only", 4, "Environment",
    ),
    _charity(
        "hum-001", "UNHCR", "unhcr",
        "Protects refugees, forcibly displaced communities and stateless people.",
        97, ["humanitarian_crisis"], ["Global"],
        ["shelter", "food", "water", "medical", "education", "mental_health"],
        "pg_direct", 5, "Refugees",
    ),
    _charity(
        "hum-002", "World Food Programme", "world-food-programme",
        "The world's largest humanitarian organization addressing hunger and promoting food security.",
        95, ["humanitarian_crisis"], ["Global"], ["food", "water", "education"],
        "partner_pg_review", 5, "Hunger",
    ),
    _charity(
        "hum-003", "International Rescue Committee", "international-rescue-committee",
        "Helps people whose lives and livelihoods are shattered by conflict and disaster.",
        94, ["humanitarian_crisis", "health_crisis"], ["Global"],
        ["medical", "mental_health", "water", "sanitation", "education"],
        "partner_pg_review", 5, "Refugees",
    ),
    _charity(
        "sj-001", "Save the Children", "save-the-children",
        "Gives children a healthy start in life, the opportunity to learn and protection from harm.",
        92, ["social_justice"], ["Global"], ["education", "food", "medical", "shelter"],
        "partner_pg_review", 5, "Children",
    ),
    _charity(
        "sj-002", "Amnesty International", "amnesty-international",
        "A global movement campaigning for a world where human rights are enjoyed by all.",
        90, ["social_justice"], ["Global"], ["legal_aid", "education", "mental_health"],
        "partner_only", 4, "Human Rights",
    ),
    _charity(
        "sj-003", "Oxfam International", "oxfam",
        "Works to end the injustice of poverty by helping people build better lives.",
        88, ["social_justice"], ["Global"], ["education", "food", "legal_aid", "water"],
        "partner_only", 4, "Poverty",
    ),
    _charity(
        "sj-004", "RAICES", "raices",
        "Defends the rights of immigrants and refugees, and empowers them to know and use their rights.",
        94, ["social_justice"], ["USA", "MEX"], ["legal_aid", "education", "mental_health"],
        "partner_pg_review", 2, "Immigration",
    ),
    _charity(
        "sj-005", "Al Otro Lado", "al-otro-lado",
        "Provides legal services to deportees, migrants, and refugees in Tijuana, Mexico.",
        91, ["social_justice"], ["USA", "MEX"],
        ["shelter", "food", "legal_aid", "mental_health", "medical"],
        "partner_pg_review", 2, "Immigration",
    ),
    _charity(
        "sj-006", "United We Dream", "united-we-dream",
        "The largest immigrant youth-led organization in the nation.",
        89, ["social_justice"], ["USA"], ["education", "legal_aid", "mental_health"],
        "partner_only", 1, "Immigration",
    ),
]


def find_by_slug(slug: str, charities: Sequence[Charity] = FALLBACK_CHARITIES) -> Optional[Charity]:
    for charity in charities:
        if charity.slug == slug:
            return charity
    return None
