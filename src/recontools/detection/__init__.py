"""Signature matching and confidence scoring."""

from recontools.detection.matcher import match
from recontools.detection.scoring import (
    CandidateScore,
    collect_matches,
    resolve_best,
    score,
    score_candidates,
)

__all__ = [
    "CandidateScore",
    "collect_matches",
    "match",
    "resolve_best",
    "score",
    "score_candidates",
]
