"""
Streamlit UI for cinelist.
Calls the local FastAPI server at http://localhost:8000, or runs locally by
loading the catalog and clients from settings like the API does.

Run API (optional):   uvicorn api:app --reload
Run UI:                streamlit run streamlit_app.py
"""

# HTTP client to call the API when running in API mode
import requests  # make web requests to the FastAPI server
# Streamlit framework to build a simple interactive UI
import streamlit as st  # UI primitives
# Typing to make function signatures clearer
from typing import Dict, List, Optional  # indicates values can be None

# Local service imports for fallback/local mode (when API isn't used)
from cinelist.discovery import DiscoveryService  # catalog + TMDB + Gemini
from cinelist.models import TMDBMovie  # poster URLs
from cinelist.settings import Settings  # environment configuration

# Default URL where the FastAPI server is expected to run locally
DEFAULT_API_URL = "http://localhost:8000"  # default API base URL

# Configure Streamlit page (title and layout width)
st.set_page_config(page_title="cinelist", layout="wide")  # wide layout

# Main page title
st.title("🎬 cinelist – Discover films from the catalog")  # friendly header


# Cache the local service so we only parse the catalog once per session
@st.cache_resource(show_spinner=True)
def init_local_service() -> Optional[DiscoveryService]:
	"""Create a local DiscoveryService from environment settings."""
	try:
		return DiscoveryService.from_settings(Settings())  # parse catalog, build clients
	except Exception as e:
		# Show an error in the UI so users know local mode failed
		st.error(f"Failed to initialize local service: {e}")
		return None  # signal failure


def poster(movie: Dict) -> Optional[str]:
	"""Absolute poster URL for a movie payload, None when it has no poster."""
	return TMDBMovie.from_payload(movie).poster_url()


def render_movie_grid(movies: List[Dict], columns: int = 5):
	"""Poster grid; the button under each poster opens the detail view."""
	cols = st.columns(columns)  # fixed-width grid
	for i, movie in enumerate(movies):
		with cols[i % columns]:
			url = poster(movie)
			if url:
				st.image(url, width='stretch')  # poster
			year = (movie.get('release_date') or '')[:4]
			st.caption(f"{movie['title']} ({year or 'n/a'}) ⭐ {movie.get('vote_average', 0):.1f}")
			if st.button("Details", key=f"details-{movie['id']}-{i}-{movie.get('_group', '')}"):
				st.session_state['selected'] = movie  # remembered across reruns
				st.rerun()  # the page already rendered the grid in this run


# Sidebar contains configuration controls
with st.sidebar:
	st.header("Settings")  # section label
	api_url = st.text_input("API URL", DEFAULT_API_URL)  # where the API lives
	use_local = st.toggle("Use local service", value=False, help="If enabled or API is unreachable, the app will run fully locally.")
	structured = st.toggle("Structured analysis", value=False, help="Show synopsis, key elements, tropes and platforms separately.")

# If not forcing local, check quickly whether the API is reachable
api_available = False  # default assumption
if not use_local:
	try:
		h = requests.get(f"{api_url}/health", timeout=3)  # ping API health endpoint
		api_available = h.ok  # True if server responded 200 OK
	except requests.RequestException:
		api_available = False  # probe failed
		st.sidebar.info("API not reachable; will use local service.")  # inform user

local_service: Optional[DiscoveryService] = None  # placeholder
if use_local or not api_available:
	with st.spinner("Loading catalog..."):
		local_service = init_local_service()


def fetch_discover() -> Dict:
	if local_service is not None:
		result = local_service.discover()
		return {
			"result_count": result.result_count,
			"genres": {name: [m.to_dict() for m in movies] for name, movies in result.genres.items()},
		}
	resp = requests.get(f"{api_url}/discover", timeout=120)
	resp.raise_for_status()  # raise error if server responded with an error code
	return resp.json()


def fetch_catalog_matches(query: str) -> List[Dict]:
	if local_service is not None:
		return [e.to_dict() for e in local_service.list_movies(query)]
	resp = requests.get(f"{api_url}/movies", params={"query": query}, timeout=30)
	resp.raise_for_status()
	return resp.json().get('movies', [])


def fetch_generated(movie: Dict) -> Dict:
	"""Synopsis (plain) or analysis (structured) for the selected movie."""
	title, overview = movie['title'], movie.get('overview') or ''
	if local_service is not None:
		if structured:
			return local_service.analysis(title, overview).to_dict()
		return {"synopsis": local_service.synopsis(title, overview)}
	path = "/analysis" if structured else "/synopsis"
	resp = requests.post(f"{api_url}{path}", json={"title": title, "overview": overview}, timeout=120)
	resp.raise_for_status()
	return resp.json()


def cached_discover() -> Dict:
	"""Discover payload kept in the session so reruns reuse the same picks."""
	if 'discover' not in st.session_state:
		st.session_state['discover'] = fetch_discover()  # paced TMDB lookups, run once
	return st.session_state['discover']


def cached_generated(movie: Dict) -> Dict:
	"""Generated text per (movie, mode); Gemini is called once for each."""
	cache = st.session_state.setdefault('generated', {})
	key = (movie['id'], structured)
	if key not in cache:
		cache[key] = fetch_generated(movie)
	return cache[key]


# Main text input where users type a title
query = st.text_input("Search the catalog", placeholder="e.g., Carol, Moonlight, Portrait")

try:
	selected = st.session_state.get('selected')
	if selected:
		# Detail view
		if st.button("← Back"):
			st.session_state.pop('selected', None)
			st.rerun()
		c1, c2 = st.columns([1, 2])
		with c1:
			url = poster(selected)
			if url:
				st.image(url, width='stretch')
		with c2:
			st.header(selected['title'])
			st.caption(selected.get('release_date') or '')
			st.subheader("AI-Generated Synopsis")
			with st.spinner("Generating..."):
				generated = cached_generated(selected)
			st.write(generated.get('synopsis', ''))
			if structured:
				if generated.get('keyElements'):
					st.markdown("**Key Elements**")
					st.write("\n".join(f"- {k}" for k in generated['keyElements']))
				if generated.get('tropesAndTags'):
					st.markdown("**Tropes & Tags**")
					st.write(" · ".join(generated['tropesAndTags']))
				if generated.get('whereToWatch'):
					st.markdown("**Where to Watch**")
					st.write(", ".join(generated['whereToWatch']))
	elif query.strip():
		matches = fetch_catalog_matches(query)
		st.success(f"{len(matches)} catalog matches")
		for entry in matches[:50]:
			st.write(f"{entry['title']} ({entry.get('year') or 'n/a'})")
	else:
		if st.button("Shuffle picks"):
			st.session_state.pop('discover', None)  # next run samples again
		with st.spinner("Looking up random picks on TMDB..."):
			payload = cached_discover()
		st.subheader(f"Explore {payload.get('result_count', 0)} movies across different genres")
		for genre, movies in payload.get('genres', {}).items():
			st.markdown(f"### {genre}")
			render_movie_grid([dict(m, _group=genre) for m in movies])
except requests.RequestException as e:  # network/API errors
	st.error(f"API request failed: {e}")  # show human-friendly message
except Exception as e:  # any other runtime error
	st.error(f"Something went wrong: {e}")  # show error

# Show a footer indicator of current mode
st.sidebar.markdown("---")  # separator
if local_service is not None:
	st.sidebar.caption("Mode: Local service")  # mode label
else:
	st.sidebar.caption("Mode: API client (ensure uvicorn api:app --reload is running)")  # mode label
