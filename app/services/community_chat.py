import logging
from datetime import datetime
from typing import Dict, Any, List, Optional

from app.models.schemas import ChatReply, ResourceGap, TrendSnapshot
from app.services.community_data import critical_gaps
from app.services.trends import ResourceFetcher, compute_trends
from app.utils.timestamps import utc_timestamp

logger = logging.getLogger(__name__)

TREND_KEYWORDS = ("trend", "data", "analysis", "intelligence")
GAP_KEYWORDS = ("gap", "need", "problem")

CHAT_DOMAIN = "community"
TOP_NEEDS_COUNT = 3
MAX_RECOMMENDATIONS = 2

DEFAULT_RESPONSE = (
    "I can provide community intelligence, trend analysis, strategic recommendations, "
    "and resource gap insights! What would you like to explore?"
)
ERROR_MESSAGE = "Community intelligence service error"
APOLOGY_RESPONSE = "I'm analyzing community patterns to better support our work together! 📊"


def classify_intent(message: str) -> str:
    """Keyword intent: the first matching rule wins, matching is case-insensitive substring"""
    lower_message = message.lower()
    if any(keyword in lower_message for keyword in TREND_KEYWORDS):
        return "trend"
    if any(keyword in lower_message for keyword in GAP_KEYWORDS):
        return "gap"
    return "default"


def render_trend_response(trends: TrendSnapshot) -> str:
    top_needs = "\n".join(
        f"• {area.category} (priority: {area.demand_score})"
        for area in trends.top_demand_areas[:TOP_NEEDS_COUNT]
    )
    emerging = "\n".join(f"• {need}" for need in trends.emerging_needs)

    return f"""📊 Here's what the community intelligence analysis shows:

**TOP COMMUNITY NEEDS:**
{top_needs}

**EMERGING TRENDS:**
{emerging}

**KEY INSIGHT:** {trends.resource_utilization}

💡 This analysis helps us prioritize resources and support where the community needs it most."""


def render_gap_response(gaps: List[ResourceGap]) -> str:
    sections = "\n\n".join(
        f"**{gap.category}**: {gap.gap_analysis}\n"
        f"• Recommendations: {', '.join(gap.recommendations[:MAX_RECOMMENDATIONS])}"
        for gap in gaps
    )

    return f"""🚨 Critical resource gaps identified:

{sections}

💡 These gaps represent the highest impact opportunities for community support and organizing."""


async def respond(
    message: str,
    fetch: ResourceFetcher,
    resource_gaps: List[ResourceGap],
    now: Optional[datetime] = None
) -> Dict[str, Any]:
    """
    Answer a chat message from trend data or the resource gap fixtures.

    Args:
        message: Raw user text
        fetch: Resource reader handed to the trend aggregator
        resource_gaps: Fixture gap records

    Returns:
        Dict with response, domain, timestamp and, per intent, analytics or resourceGaps
    """
    intent = classify_intent(message)
    timestamp = utc_timestamp(now)
    logger.info(f"Chat intent: {intent}")

    if intent == "trend":
        trends = await compute_trends(fetch)
        reply = ChatReply(
            response=render_trend_response(trends),
            domain=CHAT_DOMAIN,
            analytics=trends,
            timestamp=timestamp
        )
    elif intent == "gap":
        gaps = critical_gaps(resource_gaps)
        reply = ChatReply(
            response=render_gap_response(gaps),
            domain=CHAT_DOMAIN,
            resource_gaps=gaps,
            timestamp=timestamp
        )
    else:
        reply = ChatReply(response=DEFAULT_RESPONSE, domain=CHAT_DOMAIN, timestamp=timestamp)

    return reply.model_dump(by_alias=True, exclude_none=True)
