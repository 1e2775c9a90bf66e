"""Pydantic schemas for JSON data validation."""

from pydantic import BaseModel, Field, field_validator, model_validator

from .scoring import TiePolicy


class MatchRow(BaseModel):
    """One match as stored in weekly_results.json or entered by an admin."""

    bowler1: str = Field(..., min_length=1)
    scores1: list[int] = Field(..., min_length=3, max_length=3)
    bowler2: str = Field(..., min_length=1)
    scores2: list[int] = Field(..., min_length=3, max_length=3)

    @field_validator('scores1', 'scores2')
    @classmethod
    def validate_scores(cls, v):
        """Ensure no negative pinfall."""
        for score in v:
            if score < 0:
                raise ValueError(f'Game score cannot be negative: {score}')
        return v

    class Config:
        extra = 'ignore'


class MatchSubmission(MatchRow):
    """Payload accepted by the add-match endpoint."""

    password: str = ''
    week: int = Field(..., ge=1)


class LeagueConfig(BaseModel):
    """League configuration settings."""

    league_name: str = Field(..., min_length=1)
    current_week: int = Field(..., ge=1)
    first_half_end_week: int = Field(..., ge=1)
    weeks_in_season: int = Field(..., ge=1, le=52)
    tie_policy: TiePolicy = TiePolicy.HALF_POINT
    highlight_top: int = Field(default=5, ge=0)
    results_csv_url: str | None = None

    @model_validator(mode='after')
    def validate_weeks(self):
        """Ensure the half-season boundary falls inside the season."""
        if self.first_half_end_week > self.weeks_in_season:
            raise ValueError(
                f'first_half_end_week ({self.first_half_end_week}) is after the last week '
                f'of the season ({self.weeks_in_season})'
            )
        return self

    class Config:
        extra = 'forbid'
