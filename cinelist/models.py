"""
Data models for cinelist.
Defines the records passed between the catalog parser, the extractors and the API.
"""

# Import dataclass helpers to define simple "record-like" classes without boilerplate
from dataclasses import dataclass, field  # auto-generates __init__, __repr__, __eq__
# Import typing helpers for precise and self-documenting types
from typing import Any, Dict, List, Optional  # lists, dicts and optional values

# Base URL for TMDB poster images (size segment is appended per request)
TMDB_IMAGE_BASE_URL = "https://image.tmdb.org/t/p"  # e.g. /w500/<poster_path>


@dataclass(frozen=True)
class CatalogEntry:
	"""
	One parsed line of the film catalog.
	Immutable so entries can key lookup results; equality is structural.
	"""
	title: str  # trimmed, never empty
	year: Optional[str] = None  # 4-digit year string when the line carried one

	def to_dict(self) -> Dict[str, Optional[str]]:
		"""Plain dict used by the API and the catalog script."""
		return {"title": self.title, "year": self.year}


@dataclass(frozen=True)
class MovieAnalysis:
	"""
	Structured view of one generated analysis document.
	Every field falls back to an empty value when its section is missing.
	"""
	title: str = ""  # first line of the document
	release_date: str = ""  # second line of the document
	synopsis: str = ""  # free text of the "Synopsis" section
	key_elements: List[str] = field(default_factory=list)  # lines of "Key Elements"
	tropes_and_tags: List[str] = field(default_factory=list)  # lines of "Tropes & Tags" minus category headers
	where_to_watch: List[str] = field(default_factory=list)  # lines of "Where to Watch"

	def to_dict(self) -> Dict[str, Any]:
		"""camelCase payload consumed by the presentation layer."""
		return {
			"title": self.title,
			"releaseDate": self.release_date,
			"synopsis": self.synopsis,
			"keyElements": list(self.key_elements),
			"tropesAndTags": list(self.tropes_and_tags),
			"whereToWatch": list(self.where_to_watch),
		}


@dataclass
class TMDBMovie:
	"""
	A movie record as returned by TMDB search or detail endpoints.
	Only the fields the application reads are kept.
	"""
	id: int  # TMDB numeric id
	title: str  # display title
	release_date: str = ""  # "YYYY-MM-DD" or empty
	overview: str = ""  # TMDB plot overview
	poster_path: Optional[str] = None  # relative poster path (e.g. "/abc.jpg")
	vote_average: float = 0.0  # 0..10 rating
	vote_count: int = 0  # number of votes
	genre_ids: List[int] = field(default_factory=list)  # TMDB genre ids

	@classmethod
	def from_payload(cls, data: Dict[str, Any]) -> "TMDBMovie":
		"""Build a TMDBMovie from a raw JSON object, with safe defaults."""
		genre_ids = data.get("genre_ids")
		if genre_ids is None:
			# Detail payloads carry [{"id": .., "name": ..}] instead of genre_ids
			genre_ids = [g.get("id") for g in data.get("genres") or [] if g.get("id") is not None]
		return cls(
			id=int(data.get("id", 0)),
			title=data.get("title") or data.get("original_title") or "",
			release_date=data.get("release_date") or "",
			overview=(data.get("overview") or "").strip(),
			poster_path=data.get("poster_path"),
			vote_average=float(data.get("vote_average") or 0.0),
			vote_count=int(data.get("vote_count") or 0),
			genre_ids=[int(g) for g in genre_ids],
		)

	@property
	def release_year(self) -> Optional[str]:
		"""Year part of release_date, or None when the date is missing."""
		if not self.release_date:
			return None
		return self.release_date.split("-")[0] or None

	def poster_url(self, size: str = "w500") -> Optional[str]:
		"""Absolute poster URL for the UI, None when TMDB has no poster."""
		if not self.poster_path:
			return None
		return f"{TMDB_IMAGE_BASE_URL}/{size}{self.poster_path}"

	def to_dict(self) -> Dict[str, Any]:
		return {
			"id": self.id,
			"title": self.title,
			"release_date": self.release_date,
			"overview": self.overview,
			"poster_path": self.poster_path,
			"vote_average": self.vote_average,
			"vote_count": self.vote_count,
			"genre_ids": list(self.genre_ids),
		}
