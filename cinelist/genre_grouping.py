"""
Genre grouping for the browse grid.
A movie appears under every one of its genres, but only once per genre.
"""

from typing import Dict, Iterable, List, Mapping

from .models import TMDBMovie

UNKNOWN_GENRE = "Unknown"


def group_by_genre(
	results: Iterable[Iterable[TMDBMovie]],
	genre_map: Mapping[int, str],
) -> Dict[str, List[TMDBMovie]]:
	"""
	Group movies from several result lists by genre name.
	`results` is typically the values of a lookup keyed by catalog entry.
	Groups appear in first-seen order; unknown ids fall under "Unknown".
	"""
	groups: Dict[str, List[TMDBMovie]] = {}
	seen: Dict[str, set] = {}  # genre -> movie ids already placed

	for movies in results:
		for movie in movies:
			names = [genre_map.get(gid, UNKNOWN_GENRE) for gid in movie.genre_ids] or [UNKNOWN_GENRE]
			for name in names:
				ids = seen.setdefault(name, set())
				if movie.id in ids:
					continue
				ids.add(movie.id)
				groups.setdefault(name, []).append(movie)
	return groups
