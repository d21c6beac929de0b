"""SkillMatchPolicy — infer required skills from a work order and score a technician."""

from __future__ import annotations

from app.domain.value_objects.enums import SkillCategory

# Keyword → category. Order matters for work_category(): first match wins.
CATEGORY_KEYWORDS: tuple[tuple[SkillCategory, tuple[str, ...]], ...] = (
    (SkillCategory.ELECTRICAL, ("electrical", "wiring")),
    (SkillCategory.PLUMBING, ("plumbing", "water")),
    (SkillCategory.HVAC, ("hvac", "heating", "cooling")),
    (SkillCategory.CARPENTRY, ("carpentry", "wood")),
)

NO_REQUIREMENT_SCORE = 0.7
SPECIALIZATION_BONUS = 0.1


def infer_required_skills(description: str | None) -> frozenset[str]:
    """Scan the description for category keywords (case-insensitive).

    Each keyword maps to exactly one category tag; the result is the set
    of tags whose keywords appear anywhere in the text.
    """
    text = (description or "").lower()
    return frozenset(
        category.value
        for category, keywords in CATEGORY_KEYWORDS
        if any(keyword in text for keyword in keywords)
    )


def work_category(description: str | None) -> SkillCategory:
    """Primary category of the work: first matching keyword group, else GENERAL."""
    text = (description or "").lower()
    for category, keywords in CATEGORY_KEYWORDS:
        if any(keyword in text for keyword in keywords):
            return category
    return SkillCategory.GENERAL


def skill_match_score(description: str | None, technician_skills: set[str]) -> float:
    """Share of required skills the technician holds, plus a flat 0.1 bonus.

    Returns 0.7 as the base when nothing specific is required. Result is
    capped at 1.0.
    """
    required = infer_required_skills(description)
    if required:
        matched = sum(1 for skill in required if skill in technician_skills)
        base = matched / len(required)
    else:
        base = NO_REQUIREMENT_SCORE

    return min(1.0, base + SPECIALIZATION_BONUS)
