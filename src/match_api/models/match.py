from pydantic import BaseModel, ConfigDict, Field


class Match(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    home_team: str = Field(alias="homeTeam")
    away_team: str = Field(alias="awayTeam")
    championship: str
