"""Lexical relevance scoring for a single record.

The score is built in stages, each gated on the running total:

1. primary text (title/name) match strength -- dominant weight;
2. early exit when the title alone is too weak to matter;
3. query-token coverage of the secondary text (body/details), skipped
   once the title is already a strong prefix match;
4. a small category bonus, skipped once the score is near the cap.

The gating means a record whose title does not match at all never gets
credit for its body or category while early termination is enabled.
"""

from __future__ import annotations

from tasktree.core.config import PerformanceSettings
from tasktree.core.models import SearchableRecord

EXACT_MATCH_SCORE = 1.0
PREFIX_MATCH_SCORE = 0.8
SUFFIX_MATCH_SCORE = 0.6
CONTAINS_MATCH_SCORE = 0.4

SECONDARY_TEXT_WEIGHT = 0.3
CATEGORY_BONUS = 0.1

# Secondary text is only considered below a prefix-strength title match,
# the category bonus only below this ceiling.
SECONDARY_TEXT_GATE = PREFIX_MATCH_SCORE
CATEGORY_GATE = 0.9


def primary_match_score(primary_text: str, query: str) -> float:
    """Return the title component for already case-folded inputs."""
    if primary_text == query:
        return EXACT_MATCH_SCORE
    if primary_text.startswith(query):
        return PREFIX_MATCH_SCORE
    if primary_text.endswith(query):
        return SUFFIX_MATCH_SCORE
    if query in primary_text:
        return CONTAINS_MATCH_SCORE
    return 0.0


def token_coverage(secondary_text: str, query: str) -> float:
    """Fraction of whitespace-delimited query tokens found in *secondary_text*.

    Containment is per token and by substring, so ``"pipe"`` counts as
    found in ``"pipeline"``.  Both inputs must already be case-folded.
    """
    tokens = query.split()
    if not tokens:
        return 0.0
    found = sum(1 for token in tokens if token in secondary_text)
    return found / len(tokens)


def score_record(
    record: SearchableRecord,
    query: str,
    performance: PerformanceSettings | None = None,
) -> float:
    """Score *record* against *query*.

    Parameters
    ----------
    record:
        The record to rank.  Never mutated.
    query:
        Raw query text; case-folded here.
    performance:
        Early-termination switches.  ``None`` disables early exit.

    Returns
    -------
    float
        Relevance in ``[0, 1]``; higher is better.
    """
    query = query.lower()
    score = primary_match_score(record.primary_text.lower(), query)

    if (
        performance is not None
        and performance.enable_early_termination
        and score < performance.low_score_threshold
    ):
        return score

    if score < SECONDARY_TEXT_GATE:
        coverage = token_coverage(record.secondary_text.lower(), query)
        score += coverage * SECONDARY_TEXT_WEIGHT

    if score < CATEGORY_GATE and record.category and query in record.category.lower():
        score += CATEGORY_BONUS

    return min(score, 1.0)


class RelevanceScorer:
    """Scorer bound to a fixed set of performance switches.

    Stateless apart from the settings it was built with, so one instance
    can be shared freely between searches.
    """

    def __init__(self, performance: PerformanceSettings | None = None) -> None:
        self._performance = performance or PerformanceSettings()

    @property
    def performance(self) -> PerformanceSettings:
        return self._performance

    def score(self, record: SearchableRecord, query: str) -> float:
        return score_record(record, query, self._performance)

    def is_negligible(self, score: float) -> bool:
        """Return ``True`` when *score* falls under the early-exit cut-off."""
        return (
            self._performance.enable_early_termination
            and score < self._performance.low_score_threshold
        )
