"""Normalize organization records into the ``Charity`` display shape.

Every organization that reaches ranking or display passes through
``normalize_api_record`` and ``map_nonprofit_to_charity``; causes, needs,
countries and trust score are inferred from whatever the record carries.
"""
from __future__ import annotations

import logging
import re
from typing import Dict, List, Optional

from .models import Charity
from .types import NonprofitRecord, OrganizationApiResponse

logger = logging.getLogger(__name__)

DESCRIPTION_PLACEHOLDER = (
    "Information about this organization is being updated. Please visit their website for more details."
)

# NTEE major letters and codes relevant to crisis giving.
NTEE_TO_CAUSES: Dict[str, List[str]] = {
    "M": ["disaster_relief", "humanitarian_crisis"],
    "M20": ["disaster_relief"],
    "M23": ["disaster_relief"],
    "M24": ["disaster_relief"],
    "M99": ["disaster_relief"],
    "E": ["health_crisis"],
    "F": ["health_crisis"],
    "G": ["health_crisis"],
    "H": ["health_crisis"],
    "C": ["climate_events"],
    "Q": ["humanitarian_crisis"],
    "P": ["humanitarian_crisis"],
    "K": ["humanitarian_crisis"],
    "L": ["humanitarian_crisis"],
    "I": ["humanitarian_crisis"],
    "J": ["humanitarian_crisis"],
    "R": ["social_justice"],
}

CAUSE_KEYWORDS: Dict[str, List[str]] = {
    "disaster_relief": [
        "disaster", "emergency", "relief", "rescue", "evacuation", "earthquake", "hurricane",
        "tornado", "flood", "wildfire", "tsunami", "cyclone", "typhoon", "storm",
    ],
    "climate_events": [
        "climate", "environmental", "conservation", "sustainability", "global warming", "carbon",
        "renewable", "ecosystem", "biodiversity", "pollution", "deforestation", "ocean",
    ],
    "humanitarian_crisis": [
        "humanitarian", "refugee", "displaced", "conflict", "war", "poverty", "hunger", "famine",
        "homeless", "shelter", "human rights", "persecution", "asylum", "migration",
    ],
    "health_crisis": [
        "health", "medical", "hospital", "clinic", "disease", "epidemic", "pandemic", "outbreak",
        "healthcare", "mental health", "treatment", "patient", "medicine",
    ],
    "social_justice": [
        "justice", "equality", "rights", "advocacy", "discrimination", "civil rights", "equity",
        "inclusion", "empowerment", "marginalized", "underserved",
    ],
}

NEED_KEYWORDS: Dict[str, List[str]] = {
    "food": ["food", "nutrition", "meal", "hunger", "feeding", "nourishment"],
    "shelter": ["shelter", "housing", "home", "accommodation", "refuge", "lodging"],
    "medical": ["medical", "health", "healthcare", "treatment", "clinic", "hospital"],
    "water": ["water", "clean water", "sanitation", "hygiene", "drinking water"],
    "legal_aid": ["legal", "law", "justice", "advocacy", "rights", "counsel"],
    "rescue": ["rescue", "emergency", "evacuation", "search and rescue", "first responder"],
    "education": ["education", "school", "learning", "training", "teaching", "literacy"],
    "mental_health": ["mental health", "counseling", "therapy", "psychological", "trauma"],
    "winterization": ["winter", "cold", "heating", "warm", "blanket", "winterization"],
    "sanitation": ["sanitation", "hygiene", "toilet", "waste", "sewage"],
}
DEFAULT_NEEDS = ["food", "shelter", "medical"]

COUNTRY_PATTERNS: Dict[str, List[str]] = {
    "USA": ["united states", "usa", "u.s.a", "us", "america"],
    "CAN": ["canada", "canadian"],
    "GBR": ["united kingdom", "uk", "u.k", "england", "scotland", "wales"],
    "AUS": ["australia", "australian"],
    "IND": ["india", "indian"],
    "KEN": ["kenya", "kenyan"],
    "UGA": ["uganda", "ugandan"],
    "ETH": ["ethiopia", "ethiopian"],
    "SSD": ["south sudan"],
    "SDN": ["sudan", "sudanese"],
    "YEM": ["yemen", "yemeni"],
    "SYR": ["syria", "syrian"],
    "AFG": ["afghanistan", "afghan"],
    "PAK": ["pakistan", "pakistani"],
    "BGD": ["bangladesh", "bangladeshi"],
    "NPL": ["nepal", "nepalese"],
    "HTI": ["haiti", "haitian"],
    "UKR": ["ukraine", "ukrainian"],
    "MEX": ["mexico", "mexican"],
}
GLOBAL_MARKERS = ("global", "international", "worldwide", "multiple countries", "world", "nations")

ANIMAL_KEYWORDS = (
    "dog", "dogs", "cat", "cats", "pet", "pets", "animal", "animals", "veterinary", "vet tech",
    "wildlife", "zoo", "aquarium", "horse", "horses", "livestock", "bird", "birds",
)
HUMANITARIAN_KEYWORDS = ("human", "people", "children", "refugee", "humanitarian", "crisis", "disaster")
DOMESTIC_HEALTHCARE_KEYWORDS = (
    "hospital", "clinic", "medical center", "health system", "healthcare system", "health center",
    "medical group", "physician", "surgery center", "urgent care", "primary care", "family medicine",
)
CRISIS_HEALTHCARE_KEYWORDS = (
    "disaster", "emergency response", "humanitarian", "crisis", "refugee", "international",
    "global health", "epidemic", "pandemic", "outbreak", "conflict", "war", "displaced", "relief", "aid",
)
CORPORATE_SUFFIXES = (" inc", " corp", " llc", " ltd", " co")


def _contains(text: str, keyword: str) -> bool:
    """Substring match; keywords of three letters or fewer must match a whole word."""
    if len(keyword) <= 3:
        return re.search(rf"\b{re.escape(keyword)}\b", text) is not None
    return keyword in text


def normalize_api_record(raw: OrganizationApiResponse) -> NonprofitRecord:
    """Collapse an API record into the nonprofit shape."""
    record: NonprofitRecord = {
        "slug": raw.get("slug") or "",
        "name": raw.get("name") or "",
        "description": raw.get("description") or "",
    }
    location = raw.get("locationAddress") or raw.get("location")
    if location:
        record["locationAddress"] = location
    category = raw.get("primaryCategory") or next(iter(raw.get("categories") or []), None)
    if category:
        record["primaryCategory"] = category
    for key in ("logoUrl", "coverImageUrl", "websiteUrl", "ein", "nteeCode", "nteeCodeMeaning"):
        value = raw.get(key)
        if value:
            record[key] = value  # type: ignore[literal-required]
    return record


def map_ntee_code_to_causes(ntee_code: Optional[str]) -> List[str]:
    if not ntee_code:
        return []
    exact = NTEE_TO_CAUSES.get(ntee_code.upper())
    if exact:
        return list(exact)
    return list(NTEE_TO_CAUSES.get(ntee_code[0].upper(), []))


def infer_causes_from_description(description: str) -> List[str]:
    """A cause is inferred when at least two of its keywords appear."""
    if not description:
        return []
    text = description.lower()
    return [
        cause
        for cause, keywords in CAUSE_KEYWORDS.items()
        if sum(1 for keyword in keywords if _contains(text, keyword)) >= 2
    ]


def infer_addressed_needs(description: str, category: Optional[str] = None) -> List[str]:
    text = f"{description} {category or ''}".lower()
    needs = [need for need, keywords in NEED_KEYWORDS.items() if any(_contains(text, k) for k in keywords)]
    return needs or list(DEFAULT_NEEDS)


def extract_countries(
    location_address: Optional[str] = None,
    name: Optional[str] = None,
    description: Optional[str] = None,
) -> List[str]:
    if not location_address and not name and not description:
        return ["Global"]

    text = f"{location_address or ''} {name or ''} {description or ''}".lower()
    for code, patterns in COUNTRY_PATTERNS.items():
        if any(_contains(text, pattern) for pattern in patterns):
            return [code]

    if any(marker in text for marker in GLOBAL_MARKERS):
        return ["Global"]
    return ["USA"] if location_address else ["Global"]


def calculate_trust_score(record: NonprofitRecord) -> int:
    """Data-quality trust score in the 70-100 range."""
    score = 70
    if record.get("ein"):
        score += 10
    if len(record.get("description") or "") > 100:
        score += 5
    if record.get("logoUrl"):
        score += 5
    if record.get("websiteUrl"):
        score += 5
    if record.get("locationAddress"):
        score += 3
    if record.get("nteeCode"):
        score += 2
    return min(score, 100)


def _acronym(words: List[str]) -> str:
    return "".join(word[0] for word in words)


def is_irrelevant_organization(record: NonprofitRecord, search_term: Optional[str] = None) -> bool:
    """True when the organization should be excluded from crisis results."""
    name = (record.get("name") or "").lower()
    text = " ".join(
        [
            name,
            (record.get("description") or "").lower(),
            (record.get("primaryCategory") or "").lower(),
            (record.get("nteeCodeMeaning") or "").lower(),
        ]
    )
    ntee = (record.get("nteeCode") or "").upper()

    if search_term:
        search = search_term.lower()
        search_words = [w for w in search.split() if len(w) > 2]
        acronym = _acronym(search_words)

        # Long names searched, short acronym-like entity returned.
        if len(search) > 20 and len(name) < 20 and len(acronym) >= 3 and acronym in name:
            logger.debug("Filtering acronym confusion: %s (searched for %r)", record.get("name"), search_term)
            return True

        has_corporate_suffix = any(name.endswith(suffix) for suffix in CORPORATE_SUFFIXES)
        searched_corporate = any(word in search for word in ("inc", "corp", "llc"))
        if has_corporate_suffix and not searched_corporate and len(search_words) >= 3:
            name_words = re.sub(r"[^a-z\s]", "", name).split()
            if name_words and name_words[0] == acronym:
                logger.debug("Filtering corporate acronym entity: %s", record.get("name"))
                return True

    if ntee.startswith("D"):
        logger.debug("Filtering animal organization: %s (NTEE %s)", record.get("name"), ntee)
        return True

    if any(_contains(text, k) for k in ANIMAL_KEYWORDS) and not any(k in text for k in HUMANITARIAN_KEYWORDS):
        logger.debug("Filtering animal-related organization: %s", record.get("name"))
        return True

    if ntee.startswith(("A", "N")):
        logger.debug("Filtering arts/sports organization: %s (NTEE %s)", record.get("name"), ntee)
        return True

    if any(k in text for k in DOMESTIC_HEALTHCARE_KEYWORDS) and not any(
        _contains(text, k) for k in CRISIS_HEALTHCARE_KEYWORDS
    ):
        logger.debug("Filtering domestic healthcare provider: %s", record.get("name"))
        return True

    return False


def map_nonprofit_to_charity(record: NonprofitRecord) -> Charity:
    """Build the display shape for a normalized nonprofit record."""
    description = (record.get("description") or "").strip() or DESCRIPTION_PLACEHOLDER
    causes: List[str] = []
    for cause in map_ntee_code_to_causes(record.get("nteeCode")) + infer_causes_from_description(description):
        if cause not in causes:
            causes.append(cause)
    countries = extract_countries(record.get("locationAddress"), record.get("name"), record.get("description"))

    return Charity(
        id=record.get("slug") or "",
        name=record.get("name") or "",
        slug=record.get("slug") or "",
        description=description,
        trust_score=calculate_trust_score(record),
        logo=record.get("logoUrl") or "/placeholder.svg",
        cover_image_url=record.get("coverImageUrl"),
        website_url=record.get("websiteUrl"),
        location=record.get("locationAddress"),
        category=record.get("primaryCategory"),
        causes=causes or ["humanitarian_crisis"],
        countries=countries,
        addressed_needs=infer_addressed_needs(description, record.get("primaryCategory")),
        ein=record.get("ein"),
        ntee_code=record.get("nteeCode"),
        verified=True,
        geographic_flexibility=10 if "Global" in countries else 8,
        data_source="Every.org",
    )
