"""Treatment catalog offered at the resort."""

from typing import Optional

TREATMENT_CATALOG: dict[str, dict] = {
    "therapeutic-massage": {
        "name": "Therapeutic Massage",
        "description": "Relieve tension, improve circulation, and restore calm with targeted pressure and flowing techniques.",
    },
    "ayurvedic-treatments": {
        "name": "Ayurvedic Treatments",
        "description": "Personalized therapies guided by Ayurvedic principles to balance doshas and enhance vitality.",
    },
    "acupuncture": {
        "name": "Acupuncture",
        "description": "Gentle, precise stimulation points to support energy flow, pain relief, and deep relaxation.",
    },
    "spa-packages": {
        "name": "Spa Packages",
        "description": "Curated bundles that combine massage, herbal steam, and body rituals for full rejuvenation.",
    },
    "facial-treatments": {
        "name": "Facial Treatments",
        "description": "Nourishing facials using herbal blends for refreshed, glowing skin.",
    },
    "yoga": {
        "name": "Yoga",
        "description": "Gentle postures and breathwork to cultivate balance, flexibility, and inner peace.",
    },
}

TREATMENT_ALIASES: dict[str, str] = {
    "massage": "therapeutic-massage", "body massage": "therapeutic-massage",
    "ayurveda": "ayurvedic-treatments", "ayurvedic": "ayurvedic-treatments",
    "dosha": "ayurvedic-treatments", "shirodhara": "ayurvedic-treatments",
    "needles": "acupuncture",
    "spa": "spa-packages", "package": "spa-packages", "herbal steam": "spa-packages",
    "facial": "facial-treatments", "skin": "facial-treatments",
    "meditation": "yoga", "breathwork": "yoga",
}


def get_treatment_names() -> list[str]:
    """Return the display names of all treatments, sorted.

    This is the catalog the booking validator checks the ``treatment``
    field against.
    """
    return sorted(info["name"] for info in TREATMENT_CATALOG.values())


def get_all_treatments() -> list[dict]:
    """Return every treatment with its description, in catalog order."""
    return [
        {"id": tid, "name": info["name"], "description": info["description"]}
        for tid, info in TREATMENT_CATALOG.items()
    ]


def match_treatment(query: str) -> Optional[str]:
    """Match free text to a treatment display name. Returns None if no match."""
    normalized = query.lower().strip()
    if not normalized:
        return None
    for tid, info in TREATMENT_CATALOG.items():
        if normalized in (tid, info["name"].lower()):
            return info["name"]
    for alias, tid in TREATMENT_ALIASES.items():
        if alias in normalized:
            return TREATMENT_CATALOG[tid]["name"]
    for info in TREATMENT_CATALOG.values():
        if normalized in info["name"].lower():
            return info["name"]
    return None
