"""
Fuzzy substring matching used to filter the catalog by a user query.

The rule is intentionally permissive (high recall, low precision): a one-letter
query matches nearly every title. Type-ahead suggestions are ordered with
rapidfuzz so the closest titles still come first.
"""

from typing import List, Sequence

from rapidfuzz import fuzz  # fuzzy scoring for suggestion order

from loguru import logger

from .models import CatalogEntry

# Predictions are only offered from this many typed characters on
MIN_SUGGESTION_QUERY_LENGTH = 2


def fuzzy_match(query: str, title: str) -> bool:
	"""
	Match a normalized (lower-cased) query against a normalized title.
	True when the query is in the title, a title word is in the query,
	or the query is in a title word.
	"""
	if query in title:
		return True
	for word in title.split():
		if word in query or query in word:
			return True
	return False


def filter_entries(entries: Sequence[CatalogEntry], query: str) -> List[CatalogEntry]:
	"""Keep the entries whose title fuzzily matches `query`, in input order."""
	q = query.lower()
	matches = [e for e in entries if fuzzy_match(q, e.title.lower())]
	logger.debug(f"[Matcher] '{query}' matched {len(matches)} of {len(entries)} entries")
	return matches


def rank_suggestions(entries: Sequence[CatalogEntry], query: str, limit: int = 6) -> List[CatalogEntry]:
	"""
	Suggestions for a search box: fuzzy matches ordered by WRatio score.
	Ties keep catalog order; queries shorter than two characters yield nothing.
	"""
	q = query.strip().lower()
	if len(q) < MIN_SUGGESTION_QUERY_LENGTH:
		return []
	matches = filter_entries(entries, q)
	# sorted() is stable, so equal scores keep their catalog position
	scored = sorted(matches, key=lambda e: fuzz.WRatio(q, e.title.lower()), reverse=True)
	return scored[:max(0, limit)]
