"""
FitScore data model for RecruitFlow.

A FitScore is a snapshot of how well a candidate matches the job they
applied to. It is embedded in the candidate document and replaced in
place every time it is recalculated.
"""

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from pydantic import Field, model_validator

from recruitflow.utils.constants import (
    MAX_COMPONENT_SCORE,
    MIN_COMPONENT_SCORE,
    FitScoreLevel,
)

from .base import EmbeddedModel, utcnow


def aggregate_overall_score(technical: int, cultural: int, behavioral: int) -> int:
    """
    Combine the three component scores into the overall score.

    The mean of the components rounded half-up. This rule is fixed no
    matter which scorer produced the components.
    """
    mean = Decimal(technical + cultural + behavioral) / Decimal(3)
    return int(mean.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class FitScore(EmbeddedModel):
    """Technical, cultural and behavioral fit of a candidate for a job."""

    job_id: Optional[str] = None

    technical_score: int = Field(..., ge=MIN_COMPONENT_SCORE, le=MAX_COMPONENT_SCORE)
    cultural_score: int = Field(..., ge=MIN_COMPONENT_SCORE, le=MAX_COMPONENT_SCORE)
    behavioral_score: int = Field(..., ge=MIN_COMPONENT_SCORE, le=MAX_COMPONENT_SCORE)
    overall_score: int = Field(..., ge=MIN_COMPONENT_SCORE, le=MAX_COMPONENT_SCORE)

    ai_analysis: str = ""
    calculated_at: datetime = Field(default_factory=utcnow)

    @model_validator(mode="after")
    def check_overall_score(self) -> "FitScore":
        expected = aggregate_overall_score(
            self.technical_score, self.cultural_score, self.behavioral_score
        )
        if self.overall_score != expected:
            raise ValueError(
                f"overall_score {self.overall_score} does not match component mean {expected}"
            )
        return self

    @classmethod
    def from_components(
        cls,
        technical_score: int,
        cultural_score: int,
        behavioral_score: int,
        ai_analysis: str = "",
        job_id: Optional[str] = None,
    ) -> "FitScore":
        """Build a score, deriving ``overall_score`` from the components."""
        return cls(
            job_id=job_id,
            technical_score=technical_score,
            cultural_score=cultural_score,
            behavioral_score=behavioral_score,
            overall_score=aggregate_overall_score(
                technical_score, cultural_score, behavioral_score
            ),
            ai_analysis=ai_analysis,
        )

    @property
    def level(self) -> FitScoreLevel:
        return FitScoreLevel.from_score(self.overall_score)
