from pydantic import BaseModel, Field


class LeaderboardResponse(BaseModel):
    """Entry keys depend on the metric (see app.services.score_aggregator.METRICS)."""
    leaderboard: list[dict[str, int | str]]
    user_rank: int | None = Field(alias="userRank")
    type: str

    class Config:
        populate_by_name = True
