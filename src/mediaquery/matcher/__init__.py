"""Matcher package: turning a noisy filename into a provider match.

- terms: filename sanitizing and search-term reduction
- similarity: normalization and edit distance
- scoring: choosing the best provider result for a filename
- engine: the per-direction search loop (reduce on empty, back off on 429)
- reconciler: running both directions and picking the better decision

Example:
    from mediaquery.matcher import QueryEngine, Reconciler

    reconciler = Reconciler(QueryEngine(client))
    decision = reconciler.resolve("Game.of.Thrones.S03E09.HDTV.x264-EVOLVE.mp4", "tv")
"""

from .engine import QueryEngine, SearchProvider
from .reconciler import Reconciler, choose_decision
from .scoring import CandidateRecord, score_candidates
from .similarity import edit_distance, normalize_for_match
from .terms import IGNORED_TOKENS, SEPARATOR, ReductionResult, SearchTerm, reduce_term, sanitize

__all__ = [
    "IGNORED_TOKENS",
    "SEPARATOR",
    "CandidateRecord",
    "QueryEngine",
    "Reconciler",
    "ReductionResult",
    "SearchProvider",
    "SearchTerm",
    "choose_decision",
    "edit_distance",
    "normalize_for_match",
    "reduce_term",
    "sanitize",
    "score_candidates",
]
