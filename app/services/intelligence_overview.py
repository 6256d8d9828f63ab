import random
from datetime import datetime
from typing import Dict, Any, List, Optional

from app.models.schemas import (
    CommunityInsights,
    CommunityIntelligence,
    OverviewPayload,
    ResourceGap,
    TrendSnapshot,
)
from app.utils.timestamps import utc_timestamp

TOP_NEEDS_COUNT = 3
COMMUNITY_HEALTH = "Growing organizing capacity with resource constraints"
OVERVIEW_MESSAGE = "Community intelligence analysis based on real resource data and organizing patterns"

# Placeholder range for the decorative member count
ACTIVE_MEMBERS_MIN = 200
ACTIVE_MEMBERS_MAX = 699


def build_overview(
    trends: TrendSnapshot,
    resource_gaps: List[ResourceGap],
    rng: random.Random,
    now: Optional[datetime] = None
) -> Dict[str, Any]:
    """Merge a trend snapshot with the resource gaps into the overview payload"""
    insights = CommunityInsights(
        top_needs=[area.category for area in trends.top_demand_areas[:TOP_NEEDS_COUNT]],
        emerging_trends=list(trends.emerging_needs),
        resource_utilization=trends.resource_utilization,
        community_health=COMMUNITY_HEALTH,
        active_members=rng.randint(ACTIVE_MEMBERS_MIN, ACTIVE_MEMBERS_MAX),
    )

    payload = OverviewPayload(
        community_intelligence=CommunityIntelligence(
            trends=trends,
            resource_gaps=resource_gaps,
            insights=insights,
        ),
        analysis_date=utc_timestamp(now),
        data_confidence="high",
        message=OVERVIEW_MESSAGE,
    )
    return payload.model_dump(by_alias=True)
