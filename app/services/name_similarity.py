"""
app/services/name_similarity.py

Business-name similarity used to flag possible duplicate or look-alike
registrations.

Scores are 0-100, derived from the Levenshtein distance of the normalized
names relative to the longer name. Risk levels:

    score >= 85  -> high
    score >= 70  -> medium
    otherwise    -> low
"""

from __future__ import annotations

import math
import re
import uuid
from dataclasses import dataclass

from app.repositories.business_repository import BusinessRepository

_LEGAL_SUFFIXES = re.compile(r"\b(ltd|limited|inc|incorporated|corp|corporation|llc|plc)\b")
_NON_ALNUM = re.compile(r"[^a-z0-9\s]")
_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class SimilarityMatch:
    business_id: uuid.UUID
    name: str
    registration_number: str
    similarity_score: int
    risk_level: str


def levenshtein_distance(first: str, second: str) -> int:
    """Classic edit distance with unit insert/delete/substitute costs."""
    if len(first) < len(second):
        first, second = second, first
    previous = list(range(len(second) + 1))
    for i, left in enumerate(first, start=1):
        current = [i]
        for j, right in enumerate(second, start=1):
            cost = 0 if left == right else 1
            current.append(min(previous[j] + 1, current[j - 1] + 1, previous[j - 1] + cost))
        previous = current
    return previous[-1]


def similarity_score(first: str, second: str) -> int:
    s1 = first.lower().strip()
    s2 = second.lower().strip()
    max_len = max(len(s1), len(s2))
    if max_len == 0:
        return 100
    distance = levenshtein_distance(s1, s2)
    # Half-up rounding.
    return int(math.floor((max_len - distance) / max_len * 100 + 0.5))


def normalize_business_name(name: str) -> str:
    """Lower-case, drop legal suffixes and punctuation, collapse whitespace."""
    lowered = _LEGAL_SUFFIXES.sub("", name.lower())
    lowered = _NON_ALNUM.sub("", lowered)
    return _WHITESPACE.sub(" ", lowered).strip()


def risk_level(score: int) -> str:
    if score >= 85:
        return "high"
    if score >= 70:
        return "medium"
    return "low"


class NameSimilarityService:
    """
    Compares a candidate name with names already in the directory.
    """

    def __init__(
        self,
        repository: BusinessRepository,
        *,
        threshold: int,
        candidate_limit: int,
    ) -> None:
        self._repository = repository
        self._threshold = threshold
        self._candidate_limit = candidate_limit

    def find_similar(self, name: str, *, limit: int = 10) -> list[SimilarityMatch]:
        """
        Return registered businesses scoring at or above the threshold,
        best match first.
        """

        target = normalize_business_name(name)
        if not target:
            return []

        matches: list[SimilarityMatch] = []
        for business_id, existing_name, registration_number in self._repository.list_name_candidates(
            limit=self._candidate_limit
        ):
            score = similarity_score(target, normalize_business_name(existing_name))
            if score < self._threshold:
                continue
            matches.append(
                SimilarityMatch(
                    business_id=business_id,
                    name=existing_name,
                    registration_number=registration_number,
                    similarity_score=score,
                    risk_level=risk_level(score),
                )
            )

        matches.sort(key=lambda match: (-match.similarity_score, match.name))
        return matches[:limit]
