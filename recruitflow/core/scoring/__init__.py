"""Candidate-job fit scoring module."""

from .fit_score_engine import (
    ComponentScorer,
    ComponentScores,
    FitScoreEngine,
    KeywordComponentScorer,
    get_fit_score_engine,
)

__all__ = [
    "ComponentScorer",
    "ComponentScores",
    "FitScoreEngine",
    "KeywordComponentScorer",
    "get_fit_score_engine",
]
