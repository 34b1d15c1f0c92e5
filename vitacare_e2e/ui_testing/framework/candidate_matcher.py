"""
================================================================================
Candidate Matcher
================================================================================

Picks the search result that best matches a product name.

Product names on the storefront are long and inconsistently punctuated
("Anti -Tobacco Spray 300 ml" vs "Anti-Tobacco Spray 300ml"), so exact
equality rarely fires. Resolution is:

    1. normalize both sides (lowercase, trim)
    2. exact pass: first candidate equal to the query wins
    3. token pass: query tokens longer than 2 characters; a candidate scores
       one point per token found as a substring of it
    4. strictly highest score > 0 wins, ties keep the first candidate seen

This is a plain token-overlap count, not an edit distance or TF-IDF ranking.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from loguru import logger


MIN_TOKEN_LENGTH = 3


@dataclass(frozen=True)
class MatchCandidate:
    """A candidate label and its token-overlap score."""
    text: str
    score: int
    position: int


def normalize(text: str) -> str:
    return text.strip().lower()


def query_tokens(query: str) -> List[str]:
    """Whitespace tokens of the normalized query, noise words (<= 2 chars) dropped."""
    return [token for token in normalize(query).split() if len(token) >= MIN_TOKEN_LENGTH]


def score_candidates(query: str, candidates: Sequence[str]) -> List[MatchCandidate]:
    """Score every candidate against the query tokens, preserving input order."""
    tokens = query_tokens(query)
    scored = []
    for position, candidate in enumerate(candidates):
        text = normalize(candidate)
        score = sum(1 for token in tokens if token in text)
        scored.append(MatchCandidate(candidate, score, position))
    return scored


def best_match(query: str, candidates: Sequence[str]) -> Optional[str]:
    """
    Return the best matching candidate or None.

    Args:
        query: Free-text product name
        candidates: Labels in on-screen order

    Returns:
        The exact match, else the top token-overlap scorer, else None
    """
    wanted = normalize(query)
    for candidate in candidates:
        if normalize(candidate) == wanted:
            logger.info(f"Exact match: {candidate}")
            return candidate

    best: Optional[MatchCandidate] = None
    for scored in score_candidates(query, candidates):
        if scored.score > 0 and (best is None or scored.score > best.score):
            best = scored

    if best is None:
        logger.info(f"No matching candidate for: {query}")
        return None

    logger.info(
        f"Best match: {best.text} (score: {best.score}/{len(query_tokens(query))})"
    )
    return best.text


class CandidateMatcher:
    """Object form of `best_match` for page objects that inject a matcher."""

    def best_match(self, query: str, candidates: Sequence[str]) -> Optional[str]:
        return best_match(query, candidates)

    def score(self, query: str, candidates: Sequence[str]) -> List[MatchCandidate]:
        return score_candidates(query, candidates)


__all__ = [
    "CandidateMatcher",
    "MatchCandidate",
    "best_match",
    "normalize",
    "query_tokens",
    "score_candidates",
]
