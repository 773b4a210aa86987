"""Confidence scoring and candidate resolution."""

import math
from collections.abc import Sized

from pydantic import Field

from recontools.detection.matcher import match
from recontools.models.base import BaseSchema
from recontools.models.detection import EvidenceItem, SignatureCorpus
from recontools.models.fetch import FetchResult


class CandidateScore(BaseSchema):
    """Score and evidence of one corpus candidate."""

    category: str
    name: str
    score: int = Field(ge=0, le=100)
    evidence: list[EvidenceItem] = Field(default_factory=list)


def score(evidence: Sized | int, total_patterns: int) -> int:
    """Percentage of a candidate's patterns that produced evidence.

    Rounds half up. A candidate without patterns scores 0.
    """
    if total_patterns <= 0:
        return 0
    matched = evidence if isinstance(evidence, int) else len(evidence)
    value = math.floor(100 * matched / total_patterns + 0.5)
    return max(0, min(100, value))


def score_candidates(
    content: FetchResult,
    corpus: SignatureCorpus,
    category: str | None = None,
) -> list[CandidateScore]:
    """Score every candidate, in corpus iteration order."""
    scored = []
    for cat, signature in corpus.candidates(category):
        evidence = match(content, signature)
        scored.append(
            CandidateScore(
                category=cat,
                name=signature.name,
                score=score(evidence, signature.total_patterns),
                evidence=evidence,
            )
        )
    return scored


def resolve_best(
    content: FetchResult,
    corpus: SignatureCorpus,
    category: str | None = None,
    floor: int = 0,
) -> CandidateScore | None:
    """Highest-scoring candidate whose score is strictly above ``floor``.

    Only a strictly higher score displaces the current best, so on ties the
    candidate seen first in corpus order wins.
    """
    best: CandidateScore | None = None
    for candidate in score_candidates(content, corpus, category):
        if best is None or candidate.score > best.score:
            best = candidate

    if best is None or best.score <= floor:
        return None
    return best


def collect_matches(
    content: FetchResult,
    corpus: SignatureCorpus,
) -> dict[str, list[CandidateScore]]:
    """Every candidate with evidence, grouped by category.

    Categories without a positive candidate are left out.
    """
    grouped: dict[str, list[CandidateScore]] = {}
    for candidate in score_candidates(content, corpus):
        if candidate.evidence:
            grouped.setdefault(candidate.category, []).append(candidate)
    return grouped
