"""Typo-tolerant term matching on top of rapidfuzz.

Distances are normalised to [0, 1] (0 = exact). Every query term is paired
with its closest field term by normalised Levenshtein distance, so ``buton``
still finds ``button``. The field distance is the length-weighted mean of those
term distances plus a small coverage penalty for field terms the query did not
account for. Only a query that matches every term of a field exactly scores 0:
``button`` is exact for "Button" but not for "Radio Button".
"""

from __future__ import annotations

from dataclasses import dataclass

from rapidfuzz import process, utils
from rapidfuzz.distance import Levenshtein

# Largest distance added when none of the field's terms are matched.
COVERAGE_PENALTY = 0.1


def tokenize(text: str) -> list[str]:
    """Lowercase alphanumeric terms of ``text`` in order of appearance."""
    return utils.default_process(text).split()


@dataclass(frozen=True)
class IndexedField:
    """A searchable field, pre-processed once at index build time."""

    key: str
    text: str
    terms: tuple[str, ...]
    size: int

    @classmethod
    def from_text(cls, key: str, text: str) -> IndexedField:
        # dict.fromkeys keeps first-seen order while de-duplicating
        terms = tuple(dict.fromkeys(tokenize(text)))
        return cls(key=key, text=text, terms=terms, size=sum(len(term) for term in terms))


class QueryMatcher:
    """Matches one query against many fields, memoising closest-term lookups.

    Field vocabularies repeat across a corpus (names and labels share their
    terms), so the memo saves most of the rapidfuzz calls. A matcher is built
    per query and is not shared between threads.
    """

    def __init__(self, query: str) -> None:
        self.query = query
        self.terms = tuple(tokenize(query))
        self._length = sum(len(term) for term in self.terms)
        self._memo: dict[tuple[str, tuple[str, ...]], tuple[int, float]] = {}

    def distance(self, field: IndexedField) -> float:
        """Normalised distance between the query and ``field`` (0 = exact)."""
        if not self.terms or not field.terms:
            return 1.0

        total = 0.0
        similarity: dict[int, float] = {}
        for term in self.terms:
            index, dist = self._closest(term, field.terms)
            total += len(term) * dist
            similarity[index] = max(similarity.get(index, 0.0), 1.0 - dist)

        coverage = sum(len(field.terms[i]) * s for i, s in similarity.items()) / field.size
        return min(1.0, total / self._length + COVERAGE_PENALTY * (1.0 - coverage))

    def _closest(self, term: str, candidates: tuple[str, ...]) -> tuple[int, float]:
        key = (term, candidates)
        found = self._memo.get(key)
        if found is None:
            _, dist, index = process.extractOne(term, candidates, scorer=Levenshtein.normalized_distance)
            found = self._memo[key] = (index, dist)
        return found
