from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import List, Literal, Optional, Union

UrgencyLevel = Literal["low", "medium", "high", "critical"]
ImpactLevel = Literal["low", "medium", "high", "very_high"]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class ResourceGap(CamelModel):
    """Static record describing an unmet community need and recommended interventions"""
    category: str
    unmet_need: UrgencyLevel
    gap_analysis: str
    recommendations: List[str] = Field(default_factory=list)
    urgency_level: UrgencyLevel
    impact_potential: ImpactLevel
    resources_needed: List[str] = Field(default_factory=list)


class DemandArea(CamelModel):
    category: str
    demand_score: Union[int, float]

    @field_validator("demand_score")
    @classmethod
    def non_negative(cls, value):
        if value < 0:
            raise ValueError("demand score cannot be negative")
        return value


class TrendSnapshot(CamelModel):
    top_demand_areas: List[DemandArea] = Field(default_factory=list, max_length=5)
    emerging_needs: List[str] = Field(default_factory=list)
    resource_utilization: str
    community_growth: str


class CommunityInsights(CamelModel):
    top_needs: List[str]
    emerging_trends: List[str]
    resource_utilization: str
    community_health: str
    active_members: int


class CommunityIntelligence(CamelModel):
    trends: TrendSnapshot
    resource_gaps: List[ResourceGap]
    insights: CommunityInsights


class OverviewPayload(CamelModel):
    community_intelligence: CommunityIntelligence
    analysis_date: str
    data_confidence: str = Field(default="high")
    message: str


class ChatRequest(BaseModel):
    """Request model for community chat"""
    message: str = Field(..., description="User's free-text question")


class ChatReply(BaseModel):
    response: str
    domain: str = Field(default="community")
    analytics: Optional[TrendSnapshot] = None
    resource_gaps: Optional[List[ResourceGap]] = Field(None, serialization_alias="resourceGaps")
    timestamp: str
