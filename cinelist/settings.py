"""Runtime configuration for cinelist."""

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .catalog_parser import DEFAULT_SELF_TITLE
from .synopsis_generator import DEFAULT_MODEL

# TMDB asks clients to pace requests; lookups never go faster than this
MIN_REQUEST_DELAY_S = 0.25


class Settings(BaseSettings):
	"""Environment-aware settings (CINELIST_* variables or a .env file)."""

	catalog_path: str = Field(
		"data/lgbtq_films.txt", description="Plain-text film catalog, one film per line."
	)
	catalog_self_title: str = Field(
		DEFAULT_SELF_TITLE, description="Text of the catalog's own title line, skipped while parsing."
	)
	sample_size: int = Field(10, ge=1, description="Number of random films shown when browsing.")
	tmdb_api_key: Optional[str] = Field(default=None, description="TMDB v3 API key.")
	tmdb_base_url: str = Field("https://api.themoviedb.org/3", description="TMDB REST base URL.")
	tmdb_request_delay: float = Field(
		MIN_REQUEST_DELAY_S, description="Seconds between consecutive TMDB lookups."
	)
	tmdb_timeout: float = Field(20.0, description="Per-request timeout in seconds.")
	gemini_api_key: Optional[str] = Field(default=None, description="Google Gemini API key.")
	gemini_model: str = Field(DEFAULT_MODEL, description="Gemini model used for synopses.")

	model_config = SettingsConfigDict(
		env_prefix="CINELIST_",
		env_file=".env",
		env_file_encoding="utf-8",
	)

	@field_validator("tmdb_request_delay")
	@classmethod
	def _respect_rate_limit(cls, value: float) -> float:
		if value < MIN_REQUEST_DELAY_S:
			raise ValueError(f"tmdb_request_delay must be at least {MIN_REQUEST_DELAY_S}s")
		return value
