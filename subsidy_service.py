"""
subsidy_service.py
------------------
Catalogue of central and Kerala state farming schemes.

Public API
----------
get_subsidies()                      -> list[dict]
get_subsidies_by_category(category)  -> list[dict]
search_subsidies(query)              -> list[dict]
get_categories()                     -> list[str]
"""

from __future__ import annotations

import copy

SUBSIDIES: list[dict] = [
    {
        "scheme":        "PM-KISAN",
        "category":      "General",
        "description":   "Direct income support of ₹6,000 per year to all landholding farmer families.",
        "benefit":       "₹6,000 per year",
        "eligibility":   "All landholding farmer families with cultivable land",
        "apply_url":     "https://pmkisan.gov.in",
        "more_info_url": "https://pmkisan.gov.in/NewSchemeDetails.aspx",
    },
    {
        "scheme":        "Soil Health Card Scheme",
        "category":      "General",
        "description":   "Provides soil health cards to farmers with recommendations for nutrients and fertilizers.",
        "benefit":       "Free soil testing and recommendations",
        "eligibility":   "All farmers with agricultural land",
        "apply_url":     "https://soilhealth.dac.gov.in",
        "more_info_url": "https://soilhealth.dac.gov.in/AboutScheme.aspx",
    },
    {
        "scheme":        "Paramparagat Krishi Vikas Yojana (PKVY)",
        "category":      "Organic Farming",
        "description":   "Promotes organic farming through cluster approach and PGS certification.",
        "benefit":       "₹50,000 per hectare for 3 years",
        "eligibility":   "Farmers willing to practice organic farming",
        "apply_url":     "https://pgsindia-ncof.gov.in",
        "more_info_url": "https://pgsindia-ncof.gov.in/PKVY.aspx",
    },
    {
        "scheme":        "Pradhan Mantri Fasal Bima Yojana (PMFBY)",
        "category":      "Insurance",
        "description":   "Crop insurance scheme to provide financial support to farmers in case of crop failure.",
        "benefit":       "Up to 90% premium subsidy",
        "eligibility":   "All farmers growing notified crops",
        "apply_url":     "https://pmfby.gov.in",
        "more_info_url": "https://pmfby.gov.in/AboutUs.aspx",
    },
    {
        "scheme":        "Sub-Mission on Agricultural Mechanization (SMAM)",
        "category":      "Equipment",
        "description":   "Promotes agricultural mechanization through financial assistance for farm equipment.",
        "benefit":       "25-50% subsidy on equipment",
        "eligibility":   "Individual farmers, groups, and institutions",
        "apply_url":     "https://agrimachinery.nic.in",
        "more_info_url": "https://agrimachinery.nic.in/SMAM.aspx",
    },
    {
        "scheme":        "National Mission on Oilseeds and Oil Palm (NMOOP)",
        "category":      "Seeds",
        "description":   "Promotes oilseed cultivation and oil palm plantation.",
        "benefit":       "Subsidy on seeds and planting material",
        "eligibility":   "Farmers growing oilseeds and oil palm",
        "apply_url":     "https://nmoop.gov.in",
        "more_info_url": "https://nmoop.gov.in/AboutScheme.aspx",
    },
    {
        "scheme":        "Per Drop More Crop (PDMC)",
        "category":      "Irrigation",
        "description":   "Promotes micro irrigation systems for water use efficiency.",
        "benefit":       "35-55% subsidy on micro irrigation systems",
        "eligibility":   "Farmers with irrigation facilities",
        "apply_url":     "https://pmksy.gov.in",
        "more_info_url": "https://pmksy.gov.in/PDMC.aspx",
    },
    {
        "scheme":        "Kerala State Organic Farming Policy",
        "category":      "Organic Farming",
        "description":   "State-specific scheme to promote organic farming in Kerala.",
        "benefit":       "Financial assistance for organic certification",
        "eligibility":   "Kerala farmers practicing organic farming",
        "apply_url":     "https://keralaagriculture.gov.in",
        "more_info_url": "https://keralaagriculture.gov.in/organic-farming",
    },
    {
        "scheme":        "Kerala Coconut Development Board Schemes",
        "category":      "General",
        "description":   "Various schemes for coconut cultivation and processing.",
        "benefit":       "Subsidy on coconut seedlings and processing units",
        "eligibility":   "Coconut farmers in Kerala",
        "apply_url":     "https://coconutboard.gov.in",
        "more_info_url": "https://coconutboard.gov.in/schemes",
    },
    {
        "scheme":        "Kerala State Seed Farm Development",
        "category":      "Seeds",
        "description":   "Development of seed farms and distribution of quality seeds.",
        "benefit":       "Subsidized quality seeds",
        "eligibility":   "All farmers in Kerala",
        "apply_url":     "https://keralaagriculture.gov.in",
        "more_info_url": "https://keralaagriculture.gov.in/seed-development",
    },
]


def get_subsidies() -> list[dict]:
    """Return a copy of every scheme, so callers can't mutate the catalogue."""
    return copy.deepcopy(SUBSIDIES)


def get_subsidies_by_category(category: str) -> list[dict]:
    return [s for s in get_subsidies() if s["category"] == category]


def search_subsidies(query: str) -> list[dict]:
    """Case-insensitive substring search over scheme, description and category."""
    needle = query.lower()
    return [
        s for s in get_subsidies()
        if needle in s["scheme"].lower()
        or needle in s["description"].lower()
        or needle in s["category"].lower()
    ]


def get_categories() -> list[str]:
    seen: list[str] = []
    for s in SUBSIDIES:
        if s["category"] not in seen:
            seen.append(s["category"])
    return seen
