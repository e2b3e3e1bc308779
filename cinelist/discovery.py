"""
Discovery service module.
Ties the parsed catalog to TMDB lookups and Gemini generation for the API and UI.
"""

from dataclasses import dataclass, field  # lightweight containers for results
from typing import Dict, List, Optional, Sequence  # type annotations for clarity
import random  # optional seeded source for sampling

# Import project modules for data structures and components
from .models import CatalogEntry, MovieAnalysis, TMDBMovie  # core data classes
from .catalog_parser import CatalogParser  # catalog text -> entries
from .matcher import filter_entries, rank_suggestions  # query filtering
from .sampling import sample_entries  # random browse picks
from .genre_grouping import group_by_genre  # browse grid grouping
from .tmdb_client import TMDBClient  # metadata lookups
from .synopsis_generator import SynopsisGenerator  # Gemini generation
from .settings import Settings  # runtime configuration
from .errors import ConfigurationError  # missing credentials

# Import loguru for console logging
from loguru import logger  # simple structured logger


@dataclass
class DiscoveryResult:
	lookups: Dict[CatalogEntry, List[TMDBMovie]]  # TMDB candidates per sampled entry
	genres: Dict[str, List[TMDBMovie]]  # grid grouped by genre name
	result_count: int = 0  # total candidates found
	entries: List[CatalogEntry] = field(default_factory=list)  # sampled entries, in order


class DiscoveryService:
	"""
	High-level API combining catalog filtering, sampling, TMDB lookups and Gemini.
	TMDB and Gemini are optional; operations that need a missing one raise ConfigurationError.
	"""

	def __init__(
		self,
		entries: Sequence[CatalogEntry],  # parsed catalog
		tmdb: Optional[TMDBClient] = None,  # metadata lookups
		generator: Optional[SynopsisGenerator] = None,  # synopsis generation
		sample_size: int = 10,  # films shown when browsing
		rng: Optional[random.Random] = None,  # seeded for reproducible sampling
		catalog_loaded: bool = True,  # False when the catalog file was missing
	):
		self.entries = list(entries)  # keep catalog reference
		self.catalog_loaded = catalog_loaded
		self.tmdb = tmdb
		self.generator = generator
		self.sample_size = sample_size
		self.rng = rng
		logger.info(
			f"[Discovery] Ready with {len(self.entries)} catalog entries | "
			f"tmdb={'on' if tmdb else 'off'} | gemini={'on' if generator else 'off'}"
		)

	@classmethod
	def from_settings(cls, settings: Settings) -> "DiscoveryService":
		"""
		Build the service and its clients from settings.
		A missing catalog file leaves the catalog empty with `catalog_loaded` False;
		missing keys only disable a client.
		"""
		parser = CatalogParser(self_title=settings.catalog_self_title)
		try:
			entries = parser.load_catalog(settings.catalog_path)
			catalog_loaded = True
		except FileNotFoundError as e:
			logger.error(f"[Discovery] Catalog unavailable: {e}")
			entries, catalog_loaded = [], False

		tmdb = None
		if settings.tmdb_api_key:
			tmdb = TMDBClient(
				api_key=settings.tmdb_api_key,
				base_url=settings.tmdb_base_url,
				request_delay=settings.tmdb_request_delay,
				timeout=settings.tmdb_timeout,
			)
		else:
			logger.warning("[Discovery] TMDB API key is not configured; metadata lookups disabled")

		generator = None
		if settings.gemini_api_key:
			generator = SynopsisGenerator(api_key=settings.gemini_api_key, model_name=settings.gemini_model)
		else:
			logger.warning("[Discovery] Gemini API key is not configured; synopsis generation disabled")

		return cls(
			entries,
			tmdb=tmdb,
			generator=generator,
			sample_size=settings.sample_size,
			catalog_loaded=catalog_loaded,
		)

	def _require_tmdb(self) -> TMDBClient:
		if self.tmdb is None:
			raise ConfigurationError("TMDB API key is not configured")
		return self.tmdb

	def _require_generator(self) -> SynopsisGenerator:
		if self.generator is None:
			raise ConfigurationError("Gemini API key is not configured")
		return self.generator

	def list_movies(self, query: Optional[str] = None) -> List[CatalogEntry]:
		"""Catalog entries matching `query`, or a random sample when there is no query."""
		if query and query.strip():
			matches = filter_entries(self.entries, query.strip())
			logger.info(f"[Discovery] Query '{query}' matched {len(matches)} entries")
			return matches
		return sample_entries(self.entries, self.sample_size, rng=self.rng)

	def suggest(self, query: str, limit: int = 6) -> List[CatalogEntry]:
		"""Best catalog matches for a partially typed query."""
		return rank_suggestions(self.entries, query, limit=limit)

	def resolve(self, entries: Sequence[CatalogEntry]) -> Dict[CatalogEntry, List[TMDBMovie]]:
		"""Sequential TMDB lookup keyed by entry."""
		return self._require_tmdb().search_movies_from_list(entries)

	def discover(self) -> DiscoveryResult:
		"""Sample the catalog, resolve the picks on TMDB and group them by genre."""
		tmdb = self._require_tmdb()
		genre_map = tmdb.fetch_genres()  # id -> name
		picks = sample_entries(self.entries, self.sample_size, rng=self.rng)
		lookups = tmdb.search_movies_from_list(picks)
		genres = group_by_genre(lookups.values(), genre_map)
		count = sum(len(movies) for movies in lookups.values())
		logger.info(f"[Discovery] {len(picks)} picks -> {count} movies across {len(genres)} genres")
		return DiscoveryResult(lookups=lookups, genres=genres, result_count=count, entries=picks)

	def search_tmdb(self, query: str) -> List[TMDBMovie]:
		"""Direct TMDB search for the search box."""
		return self._require_tmdb().search_movie(query)

	def predictions(self, query: str) -> List[Dict[str, object]]:
		return self._require_tmdb().predictions(query)

	def movie_details(self, movie_id: int) -> TMDBMovie:
		return self._require_tmdb().get_movie_details(movie_id)

	def synopsis(self, title: str, overview: str) -> str:
		"""Cleaned free-form synopsis."""
		return self._require_generator().generate_synopsis(title, overview)

	def analysis(self, title: str, overview: str) -> MovieAnalysis:
		"""Structured analysis (synopsis, key elements, tropes, platforms)."""
		return self._require_generator().generate_analysis(title, overview)
