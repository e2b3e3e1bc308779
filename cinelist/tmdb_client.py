"""
TMDB client module.
Looks catalog entries up on The Movie Database and fetches movie details and genres.
"""

# Standard libs for pacing and typing
import time  # delay between consecutive lookups
from typing import Callable, Dict, List, Optional, Sequence, Union  # type hints

# HTTP client for the TMDB REST API
import requests  # blocking HTTP calls

# Console logging
from loguru import logger  # console logger

from .errors import UpstreamServiceError  # failure of the remote service
from .models import CatalogEntry, TMDBMovie  # entry in, movie records out
from .ranking import Ranker  # candidate ordering
from .settings import MIN_REQUEST_DELAY_S  # lower bound for pacing

# Predictions (search box dropdown) settings
PREDICTION_LIMIT = 6  # number of suggestions shown
PREDICTION_MIN_QUERY_LENGTH = 2  # shorter queries get no suggestions


class TMDBClient:
	"""
	Thin wrapper over the TMDB v3 endpoints used by the application.
	All configuration is passed in; nothing is read from the environment here.
	"""

	def __init__(
		self,
		api_key: str,
		base_url: str = "https://api.themoviedb.org/3",
		request_delay: float = MIN_REQUEST_DELAY_S,
		timeout: float = 20.0,
		session: Optional[requests.Session] = None,
		sleep: Callable[[float], None] = time.sleep,
	):
		if not api_key:
			raise ValueError("TMDB API key is required")
		self.api_key = api_key  # v3 key sent as a query parameter
		self.base_url = base_url.rstrip('/')  # no trailing slash
		self.request_delay = max(MIN_REQUEST_DELAY_S, request_delay)  # never faster than the floor
		self.timeout = timeout  # seconds per request
		self.session = session or requests.Session()  # reuse connections
		self._sleep = sleep  # swappable for tests
		self.ranker = Ranker()  # candidate ordering
		logger.debug(f"[TMDB] Client ready | base_url={self.base_url} | delay={self.request_delay}s")

	def _get(self, path: str, **params) -> dict:
		"""GET a TMDB path and return the decoded JSON body; raises requests errors."""
		query = {"api_key": self.api_key, **params}
		resp = self.session.get(f"{self.base_url}{path}", params=query, timeout=self.timeout)
		resp.raise_for_status()  # non-2xx -> requests.HTTPError
		return resp.json()

	def search_movie(self, query: Union[str, CatalogEntry]) -> List[TMDBMovie]:
		"""
		Search TMDB for a free-text query or a catalog entry.
		The entry year is not sent to TMDB; it only orders the candidates, so an
		off-by-one catalog year still finds the film. Failures produce an empty list.
		"""
		if isinstance(query, CatalogEntry):
			title, year = query.title, query.year
		else:
			title, year = query, None

		params = {"query": title, "language": "en-US", "include_adult": "false", "page": 1}

		try:
			data = self._get("/search/movie", **params)
		except (requests.RequestException, ValueError) as e:
			logger.error(f"[TMDB] Error searching for movie '{title}': {e}")
			return []

		candidates = [TMDBMovie.from_payload(item) for item in data.get("results") or []]
		ranked = self.ranker.rank(candidates, title, year)
		logger.debug(f"[TMDB] '{title}' ({year or '-'}) -> {len(ranked)} candidates")
		return ranked

	def search_movies_from_list(self, entries: Sequence[CatalogEntry]) -> Dict[CatalogEntry, List[TMDBMovie]]:
		"""
		Look up entries one at a time, pausing between consecutive requests.
		Results are keyed by the source entry, in input order.
		"""
		results: Dict[CatalogEntry, List[TMDBMovie]] = {}
		for i, entry in enumerate(entries):
			if i > 0:
				self._sleep(self.request_delay)  # respect TMDB rate limits
			results[entry] = self.search_movie(entry)
		found = sum(len(movies) for movies in results.values())
		logger.info(f"[TMDB] Looked up {len(results)} entries, {found} candidate movies")
		return results

	def get_movie_details(self, movie_id: int) -> TMDBMovie:
		"""Fetch one movie by id; raises UpstreamServiceError on failure."""
		try:
			data = self._get(f"/movie/{movie_id}", language="en-US")
		except (requests.RequestException, ValueError) as e:
			logger.error(f"[TMDB] Failed to fetch details for movie {movie_id}: {e}")
			raise UpstreamServiceError("tmdb", f"Failed to fetch movie details from TMDB: {e}") from e
		return TMDBMovie.from_payload(data)

	def fetch_genres(self) -> Dict[int, str]:
		"""Map TMDB genre ids to names; empty on failure."""
		try:
			data = self._get("/genre/movie/list", language="en-US")
		except (requests.RequestException, ValueError) as e:
			logger.error(f"[TMDB] Error fetching genres: {e}")
			return {}
		return {int(g["id"]): g["name"] for g in data.get("genres") or [] if "id" in g and "name" in g}

	def predictions(self, query: str, limit: int = PREDICTION_LIMIT) -> List[Dict[str, object]]:
		"""Search-as-you-type suggestions as {id, title} pairs."""
		query = (query or "").strip()
		if len(query) < PREDICTION_MIN_QUERY_LENGTH:
			return []
		try:
			data = self._get("/search/movie", query=query, include_adult="false")
		except (requests.RequestException, ValueError) as e:
			logger.error(f"[TMDB] Error fetching predictions for '{query}': {e}")
			return []
		return [
			{"id": item.get("id"), "title": item.get("title")}
			for item in (data.get("results") or [])[:limit]
		]
