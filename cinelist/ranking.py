"""
Ranking module.
Orders TMDB search candidates for a catalog entry.
"""

from typing import List, Optional, Sequence, Tuple

from .models import TMDBMovie


class Ranker:
	"""
	Orders candidates by three signals, most important first:
	- exact title match (case-insensitive, surrounding spaces ignored)
	- release year equal to the catalog year, when one is known
	- vote count, descending
	"""

	def rank(self, candidates: Sequence[TMDBMovie], title: str, year: Optional[str] = None) -> List[TMDBMovie]:
		"""Return a new list; ties keep TMDB's original order."""
		wanted = title.strip().lower()
		return sorted(candidates, key=lambda movie: self._sort_key(movie, wanted, year))

	def _sort_key(self, movie: TMDBMovie, wanted_title: str, year: Optional[str]) -> Tuple[int, int, int]:
		exact = movie.title.strip().lower() == wanted_title
		# Without a catalog year every candidate ties on this signal
		year_match = bool(year) and movie.release_year == year
		return (
			0 if exact else 1,
			0 if year_match else 1,
			-movie.vote_count,
		)


def rank_candidates(candidates: Sequence[TMDBMovie], title: str, year: Optional[str] = None) -> List[TMDBMovie]:
	"""Shortcut for Ranker().rank(...)."""
	return Ranker().rank(candidates, title, year)
