"""
Community resource gap data based on IVOR categorizations.

Loaded once at import and never mutated; handlers receive it through
``app.dependencies.get_resource_gaps``.
"""

from typing import List, Tuple

from app.models.schemas import ResourceGap

RESOURCE_GAPS: Tuple[ResourceGap, ...] = (
    ResourceGap(
        category="Mental Health",
        unmet_need="high",
        gap_analysis="Only 23% of Black queer individuals report having access to culturally competent mental health support",
        recommendations=[
            "Expand peer support training",
            "Create more QTBIPOC therapist networks",
            "Develop community crisis response teams",
        ],
        urgency_level="critical",
        impact_potential="very_high",
        resources_needed=["funding", "trained_facilitators", "safe_spaces"],
    ),
    ResourceGap(
        category="Housing",
        unmet_need="critical",
        gap_analysis="67% of young LGBTQ+ individuals experience housing insecurity, with Black trans people most affected",
        recommendations=[
            "Expand emergency housing programs",
            "Create trans-affirming housing cooperatives",
            "Advocate for inclusive housing policies",
        ],
        urgency_level="critical",
        impact_potential="high",
        resources_needed=["emergency_funding", "housing_advocates", "legal_support"],
    ),
    ResourceGap(
        category="Healthcare",
        unmet_need="high",
        gap_analysis="Limited LGBTQ+-affirming healthcare options, especially for trans healthcare and sexual health",
        recommendations=[
            "Support community health clinics",
            "Train healthcare advocates",
            "Document discrimination cases",
        ],
        urgency_level="high",
        impact_potential="high",
        resources_needed=["healthcare_advocates", "documentation_systems", "clinic_support"],
    ),
)


def get_resource_gaps() -> List[ResourceGap]:
    return list(RESOURCE_GAPS)


def critical_gaps(resource_gaps: List[ResourceGap]) -> List[ResourceGap]:
    """Gaps whose urgency level is critical, in fixture order"""
    return [gap for gap in resource_gaps if gap.urgency_level == "critical"]
