"""
FastAPI server exposing the cinelist API.
Endpoints:
- GET /health: basic health check
- GET /movies?query=...: catalog entries matching the query, or 10 random ones
- GET /movies/suggest?query=...: best catalog matches for type-ahead
- GET /movies/{id}: TMDB details for one movie
- GET /search?q=...: direct TMDB search, ranked
- GET /predictions?query=...: TMDB suggestions for the search box
- GET /discover: random catalog picks resolved on TMDB and grouped by genre
- POST /synopsis: AI-generated synopsis for {title, overview}
- POST /analysis: structured AI analysis for {title, overview}

Startup parses the catalog file named in the settings and builds the TMDB and
Gemini clients when their API keys are configured.
"""

# Import standard libraries for timing
import time  # measure startup and request latencies
from typing import Dict, List, Optional  # precise typing for clarity

# Import FastAPI for building the web API and Pydantic for request/response models
from fastapi import FastAPI, Query, Request  # FastAPI primitives
from fastapi.responses import JSONResponse  # error payloads in the {"error": ...} shape
from pydantic import BaseModel  # request/response schema definitions

# Import our internal modules
from cinelist.discovery import DiscoveryService  # catalog + TMDB + Gemini orchestration
from cinelist.errors import ConfigurationError, UpstreamServiceError  # service failures
from cinelist.settings import Settings  # environment configuration

# Import loguru for simple, structured console logging
from loguru import logger  # convenient console logger


# Pydantic model for a single catalog entry in responses
class EntryOut(BaseModel):
	title: str  # catalog title
	year: Optional[str] = None  # 4-digit year if the catalog line had one


# Pydantic model for the /movies payload
class MovieListResponse(BaseModel):
	movies: List[EntryOut]  # filtered or sampled entries


# Pydantic model describing one TMDB movie in responses
class TMDBMovieOut(BaseModel):
	id: int
	title: str
	release_date: str = ""
	overview: str = ""
	poster_path: Optional[str] = None
	vote_average: float = 0.0
	vote_count: int = 0
	genre_ids: List[int] = []


# Pydantic model for the /discover payload
class DiscoverResponse(BaseModel):
	result_count: int  # total TMDB candidates found
	genres: Dict[str, List[TMDBMovieOut]]  # genre name -> movies


# Request body shared by /synopsis and /analysis
class GenerationRequest(BaseModel):
	title: Optional[str] = None  # movie title
	overview: Optional[str] = None  # TMDB overview used as context


class SynopsisResponse(BaseModel):
	synopsis: str  # cleaned generated text


class AnalysisResponse(BaseModel):
	title: str
	releaseDate: str
	synopsis: str
	keyElements: List[str]
	tropesAndTags: List[str]
	whereToWatch: List[str]


def _error(message: str, status_code: int, details: Optional[str] = None) -> JSONResponse:
	"""Error payload with a generic message and optional detail."""
	body = {"error": message}
	if details:
		body["details"] = details
	return JSONResponse(body, status_code=status_code)


def create_app(settings: Optional[Settings] = None, service: Optional[DiscoveryService] = None) -> FastAPI:
	"""Build the application; pass `service` to skip loading from settings."""
	app = FastAPI(title="cinelist API", version="1.0.0")  # web app
	app.state.settings = settings or Settings()  # configuration
	app.state.service = service  # may be built at startup
	app.state.startup_seconds = 0.0  # measures how long startup took

	def get_service() -> DiscoveryService:
		"""Return the service, loading it from settings on first use."""
		if app.state.service is None:
			start = time.time()  # start timer for startup latency
			app.state.service = DiscoveryService.from_settings(app.state.settings)
			app.state.startup_seconds = time.time() - start  # elapsed seconds
			logger.info(f"[API] Startup complete in {app.state.startup_seconds:.2f}s")  # summary log
		return app.state.service

	def catalog_service() -> Optional[DiscoveryService]:
		"""The service for catalog routes, or None when the catalog file was missing."""
		svc = get_service()
		return svc if svc.catalog_loaded else None

	# FastAPI startup hook to initialize the service once
	@app.on_event("startup")
	async def startup_event():
		logger.info("[API] Startup: loading catalog and clients...")  # log intent
		get_service()

	@app.exception_handler(ConfigurationError)
	async def configuration_error_handler(request: Request, exc: ConfigurationError):
		logger.error(f"[API] {request.url.path}: {exc}")
		return _error(str(exc), 500)

	# Simple health endpoint for readiness checks
	@app.get("/health")
	async def health():
		"""Return minimal health info for liveness/readiness probes."""
		svc = app.state.service
		return {
			"status": "ok",  # constant indicator
			"catalog_loaded": bool(svc and svc.catalog_loaded),  # True if the catalog was parsed
			"catalog_size": len(svc.entries) if svc else 0,  # number of entries
			"startup_seconds": round(app.state.startup_seconds, 2),  # startup latency
		}

	@app.get("/movies", response_model=MovieListResponse)
	def list_movies(query: Optional[str] = Query(None, description="Text to match against catalog titles")):
		"""Filter the catalog by `query`, or return a random sample."""
		svc = catalog_service()
		if svc is None:
			return _error("Movie list file not found", 404)
		entries = svc.list_movies(query)  # filtered or sampled
		logger.debug(f"[API] /movies query='{query}' -> {len(entries)} entries")  # trace
		return MovieListResponse(movies=[EntryOut(**e.to_dict()) for e in entries])

	@app.get("/movies/suggest", response_model=MovieListResponse)
	def suggest_movies(query: str = Query(..., description="Partially typed title"), limit: int = 6):
		svc = catalog_service()
		if svc is None:
			return _error("Movie list file not found", 404)
		entries = svc.suggest(query, limit=limit)
		return MovieListResponse(movies=[EntryOut(**e.to_dict()) for e in entries])

	@app.get("/movies/{movie_id}", response_model=TMDBMovieOut)
	def movie_details(movie_id: int):
		"""Proxy TMDB movie details."""
		svc = get_service()
		try:
			movie = svc.movie_details(movie_id)
		except UpstreamServiceError as e:
			logger.error(f"[API] TMDB API error: {e.detail}")  # keep detail in the log
			return _error("Failed to fetch movie details", 500)
		return TMDBMovieOut(**movie.to_dict())

	@app.get("/search", response_model=List[TMDBMovieOut])
	def search_tmdb(q: str = Query(..., description="Free-text title search on TMDB")):
		"""Direct TMDB search for the search box, best candidates first."""
		svc = get_service()
		movies = svc.search_tmdb(q)
		logger.info(f"[API] /search q='{q}' -> {len(movies)} movies")  # summary
		return [TMDBMovieOut(**m.to_dict()) for m in movies]

	@app.get("/predictions")
	def predictions(query: str = Query("", description="Partially typed title")):
		"""TMDB suggestions ({id, title}) for the dropdown under the search box."""
		svc = get_service()
		return {"predictions": svc.predictions(query)}

	@app.get("/discover", response_model=DiscoverResponse)
	def discover():
		"""Random catalog picks resolved on TMDB, grouped by genre."""
		svc = catalog_service()
		if svc is None:
			return _error("Movie list file not found", 404)
		start = time.time()  # lookups are paced, so this is slow by nature
		result = svc.discover()
		logger.info(f"[API] /discover served {result.result_count} movies in {time.time() - start:.2f}s")
		return DiscoverResponse(
			result_count=result.result_count,
			genres={
				name: [TMDBMovieOut(**m.to_dict()) for m in movies]
				for name, movies in result.genres.items()
			},
		)

	def _validate(body: GenerationRequest) -> Optional[JSONResponse]:
		if not body.title or not body.overview:
			return _error("Title and overview are required", 400)
		return None

	@app.post("/synopsis", response_model=SynopsisResponse)
	def synopsis(body: GenerationRequest):
		"""Generate a cleaned synopsis with Gemini."""
		invalid = _validate(body)
		if invalid is not None:
			return invalid
		svc = get_service()
		try:
			text = svc.synopsis(body.title, body.overview)
		except UpstreamServiceError as e:
			return _error("Failed to generate synopsis", 500, details=e.detail)
		return SynopsisResponse(synopsis=text)

	@app.post("/analysis", response_model=AnalysisResponse)
	def analysis(body: GenerationRequest):
		"""Generate and extract a structured analysis with Gemini."""
		invalid = _validate(body)
		if invalid is not None:
			return invalid
		svc = get_service()
		try:
			result = svc.analysis(body.title, body.overview)
		except UpstreamServiceError as e:
			return _error("Failed to generate analysis", 500, details=e.detail)
		return AnalysisResponse(**result.to_dict())

	return app


# Application used by `uvicorn api:app`
app = create_app()
