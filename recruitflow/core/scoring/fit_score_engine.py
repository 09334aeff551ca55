"""
Candidate-job fit scoring engine.

Scores how well an application matches the job it was submitted to along
three dimensions:
- technical: listed skills and experience/deliveries wording
- cultural: the job's values against the candidate's culture answer
- behavioral: the job's energy expectations against the candidate's
  energy and performance answers

Component scores come from a replaceable :class:`ComponentScorer`; the
overall score is always the rounded mean of the three components.
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from recruitflow.data.models import Candidate, FitScore, Job
from recruitflow.utils.constants import (
    MAX_COMPONENT_SCORE,
    MIN_COMPONENT_SCORE,
    NEUTRAL_COMPONENT_SCORE,
    STOPWORDS,
    TECHNICAL_SKILLS_WEIGHT,
    FitScoreLevel,
)
from recruitflow.utils.exceptions import JobMismatchError, NotFoundError
from recruitflow.utils.logger import get_logger

logger = get_logger(__name__)

_TOKEN_PATTERN = re.compile(r"[a-z0-9][a-z0-9+#]*")


def tokenize(text: str) -> set[str]:
    """Lowercase content words of ``text``, stopwords removed."""
    return {
        token
        for token in _TOKEN_PATTERN.findall(text.lower())
        if len(token) > 1 and token not in STOPWORDS
    }


def contains_phrase(text: str, phrase: str) -> bool:
    """Case-insensitive whole-word search for ``phrase`` in ``text``."""
    phrase = phrase.strip().lower()
    if not phrase:
        return False
    pattern = r"(?<![a-z0-9])" + re.escape(phrase) + r"(?![a-z0-9])"
    return re.search(pattern, text.lower()) is not None


def _overlap(expected: set[str], actual: set[str]) -> Optional[float]:
    """Share of ``expected`` found in ``actual``; ``None`` when nothing is expected."""
    if not expected:
        return None
    return len(expected & actual) / len(expected)


def to_component_score(value: float) -> int:
    """Round half-up and clamp into the component score range."""
    rounded = int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    return max(MIN_COMPONENT_SCORE, min(MAX_COMPONENT_SCORE, rounded))


@dataclass
class ComponentScores:
    """Raw output of a component scorer (values may fall outside 0-100)."""

    technical: float
    cultural: float
    behavioral: float

    matched_skills: list[str] = field(default_factory=list)
    missing_skills: list[str] = field(default_factory=list)


class ComponentScorer(ABC):
    """Produces the three component scores for a candidate/job pair."""

    @abstractmethod
    def score(self, candidate: Candidate, job: Job) -> ComponentScores:
        """Score one application against its job."""


class KeywordComponentScorer(ComponentScorer):
    """
    Rule-based scorer comparing the job's wording with the candidate's answers.

    Each component is the share of the job's expectations that show up in
    the matching answer, scaled to 0-100. A job that leaves a dimension
    empty gives that component a neutral score.
    """

    def __init__(self, skills_weight: float = TECHNICAL_SKILLS_WEIGHT):
        self.skills_weight = skills_weight

    def score(self, candidate: Candidate, job: Job) -> ComponentScores:
        fit = candidate.cultural_fit

        technical, matched, missing = self._score_technical(job, fit.narrative)
        cultural = self._score_cultural(job, fit.culture)
        behavioral = self._score_behavioral(job, f"{fit.energy} {fit.performance}")

        return ComponentScores(
            technical=technical,
            cultural=cultural,
            behavioral=behavioral,
            matched_skills=matched,
            missing_skills=missing,
        )

    def _score_technical(
        self, job: Job, narrative: str
    ) -> tuple[float, list[str], list[str]]:
        """Match listed skills and experience/deliveries wording."""
        skills = job.performance.skills
        matched = [s for s in skills if contains_phrase(narrative, s)]
        missing = [s for s in skills if s not in matched]
        skill_ratio = len(matched) / len(skills) if skills else None

        expectations = tokenize(
            f"{job.performance.experience} {job.performance.deliveries}"
        )
        keyword_ratio = _overlap(expectations, tokenize(narrative))

        if skill_ratio is None and keyword_ratio is None:
            return float(NEUTRAL_COMPONENT_SCORE), matched, missing
        if keyword_ratio is None:
            return skill_ratio * 100, matched, missing
        if skill_ratio is None:
            return keyword_ratio * 100, matched, missing

        combined = (
            self.skills_weight * skill_ratio + (1 - self.skills_weight) * keyword_ratio
        )
        return combined * 100, matched, missing

    def _score_cultural(self, job: Job, culture_answer: str) -> float:
        """Average how well each of the job's values is echoed in the answer."""
        answer_tokens = tokenize(culture_answer)
        value_scores = []
        for value in job.culture.legal_values:
            if contains_phrase(culture_answer, value):
                value_scores.append(1.0)
                continue
            ratio = _overlap(tokenize(value), answer_tokens)
            if ratio is not None:
                value_scores.append(ratio)

        if not value_scores:
            return float(NEUTRAL_COMPONENT_SCORE)
        return sum(value_scores) / len(value_scores) * 100

    def _score_behavioral(self, job: Job, answer: str) -> float:
        """Match availability, deadline and pressure expectations."""
        energy = job.energy
        expectations = tokenize(f"{energy.availability} {energy.deadlines} {energy.pressure}")
        ratio = _overlap(expectations, tokenize(answer))
        if ratio is None:
            return float(NEUTRAL_COMPONENT_SCORE)
        return ratio * 100


class FitScoreEngine:
    """
    Engine producing FitScore snapshots for candidates.

    The engine validates the pairing, clamps the scorer's output and
    derives the overall score and written analysis.
    """

    def __init__(self, scorer: Optional[ComponentScorer] = None):
        """
        Initialize the engine.

        Args:
            scorer: Component scorer to use (keyword scorer by default)
        """
        self.scorer = scorer or KeywordComponentScorer()

    def calculate(self, candidate: Optional[Candidate], job: Optional[Job]) -> FitScore:
        """
        Score a candidate against the job they applied to.

        Args:
            candidate: Candidate to score
            job: The candidate's job

        Returns:
            A new FitScore (not yet persisted)

        Raises:
            NotFoundError: If the candidate or the job is missing.
            JobMismatchError: If the candidate did not apply to ``job``.
        """
        if candidate is None:
            raise NotFoundError("Candidate", "(none)")
        if job is None:
            raise NotFoundError("Job", candidate.job_id)
        if candidate.job_id != job.id:
            raise JobMismatchError(candidate.id, candidate.job_id, job.id)

        components = self.scorer.score(candidate, job)
        technical = to_component_score(components.technical)
        cultural = to_component_score(components.cultural)
        behavioral = to_component_score(components.behavioral)

        fit_score = FitScore.from_components(
            technical_score=technical,
            cultural_score=cultural,
            behavioral_score=behavioral,
            job_id=job.id,
        )
        fit_score.ai_analysis = self._build_analysis(fit_score, components)

        logger.debug(
            f"Scored candidate {candidate.id} for job {job.id}: "
            f"{technical}/{cultural}/{behavioral} -> {fit_score.overall_score}"
        )
        return fit_score

    def _build_analysis(self, fit_score: FitScore, components: ComponentScores) -> str:
        """Short human-readable summary of the score."""
        level = FitScoreLevel.from_score(fit_score.overall_score)
        parts = [
            f"{level.value.capitalize()} fit ({fit_score.overall_score}/100).",
            f"Technical {fit_score.technical_score}, cultural {fit_score.cultural_score}, "
            f"behavioral {fit_score.behavioral_score}.",
        ]

        if components.matched_skills:
            parts.append(f"Matched skills: {', '.join(components.matched_skills)}.")
        if components.missing_skills:
            parts.append(f"Missing skills: {', '.join(components.missing_skills)}.")
        if not components.matched_skills and not components.missing_skills:
            parts.append("The job lists no skills.")

        return " ".join(parts)


# Singleton instance
_fit_score_engine: Optional[FitScoreEngine] = None


def get_fit_score_engine() -> FitScoreEngine:
    """Get the fit score engine singleton instance."""
    global _fit_score_engine
    if _fit_score_engine is None:
        _fit_score_engine = FitScoreEngine()
    return _fit_score_engine
