"""
Unit tests for the TMDB client, candidate ranking, and genre grouping.
A fake session stands in for the network; no request leaves the process.
Run: python tests/test_tmdb_client.py
"""

import sys
from pathlib import Path

import requests

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
	sys.path.insert(0, str(ROOT))

from cinelist.errors import UpstreamServiceError
from cinelist.genre_grouping import group_by_genre
from cinelist.models import CatalogEntry, TMDBMovie
from cinelist.ranking import rank_candidates
from cinelist.tmdb_client import TMDBClient


def assert_equal(actual, expected, msg):
	if actual != expected:
		raise AssertionError(f"{msg} | expected={expected}, actual={actual}")


def assert_true(cond, msg):
	if not cond:
		raise AssertionError(msg)


class FakeResponse:
	def __init__(self, payload, status_code=200):
		self.payload = payload
		self.status_code = status_code

	def raise_for_status(self):
		if self.status_code >= 400:
			raise requests.HTTPError(f"{self.status_code} error")

	def json(self):
		return self.payload


class FakeSession:
	"""Records every GET and answers from a path -> payload table."""

	def __init__(self, routes, fail=False):
		self.routes = routes
		self.fail = fail
		self.calls = []

	def get(self, url, params=None, timeout=None):
		self.calls.append((url, dict(params or {})))
		if self.fail:
			raise requests.ConnectionError("network down")
		for path, payload in self.routes.items():
			if url.endswith(path):
				return FakeResponse(payload)
		return FakeResponse({"status_message": "not found"}, status_code=404)


def movie(id, title, date="", votes=0, genres=None):
	return {"id": id, "title": title, "release_date": date, "vote_count": votes, "genre_ids": genres or []}


SEARCH_RESULTS = {"results": [
	movie(1, "Carol Remake", "2020-01-01", votes=900),
	movie(2, "Carol", "1990-05-01", votes=50),
	movie(3, "Carol", "2015-11-20", votes=30),
]}


def make_client(session, sleeps=None):
	sleeps = sleeps if sleeps is not None else []
	return TMDBClient(api_key="k", session=session, sleep=sleeps.append)


def test_search_movie_ranks_candidates():
	session = FakeSession({"/search/movie": SEARCH_RESULTS})
	ranked = make_client(session).search_movie(CatalogEntry("Carol", "2015"))
	assert_equal([m.id for m in ranked], [3, 2, 1], "exact title, then year, then votes")
	url, params = session.calls[0]
	assert_equal((params["query"], params["api_key"]), ("Carol", "k"), "query params")
	assert_true("year" not in params, "year only ranks, never filters")


def test_search_movie_by_text_uses_votes():
	session = FakeSession({"/search/movie": SEARCH_RESULTS})
	ranked = make_client(session).search_movie("carol")
	assert_equal([m.id for m in ranked], [2, 3, 1], "exact titles by votes when no year")
	assert_true("year" not in session.calls[0][1], "no year filter for free text")


def test_search_failures_return_empty():
	assert_equal(make_client(FakeSession({}, fail=True)).search_movie("Carol"), [], "network error")
	assert_equal(make_client(FakeSession({})).search_movie("Carol"), [], "HTTP error")


def test_sequential_lookup_paced():
	sleeps = []
	session = FakeSession({"/search/movie": SEARCH_RESULTS})
	entries = [CatalogEntry("Carol", "2015"), CatalogEntry("Bound", "1996"), CatalogEntry("Carol", "2015")]
	results = make_client(session, sleeps).search_movies_from_list(entries)
	assert_equal(len(session.calls), 3, "one request per entry")
	assert_equal(sleeps, [0.25, 0.25], "uniform delay between consecutive requests only")
	assert_equal(list(results), [CatalogEntry("Carol", "2015"), CatalogEntry("Bound", "1996")], "keyed by entry")


def test_delay_never_below_floor():
	client = TMDBClient(api_key="k", request_delay=0.01, session=FakeSession({}))
	assert_equal(client.request_delay, 0.25, "floor applied")


def test_requires_api_key():
	try:
		TMDBClient(api_key="")
	except ValueError:
		return
	raise AssertionError("empty key should raise")


def test_movie_details():
	detail = dict(movie(3, "Carol", "2015-11-20", votes=30), genres=[{"id": 18, "name": "Drama"}])
	del detail["genre_ids"]
	client = make_client(FakeSession({"/movie/3": detail}))
	m = client.get_movie_details(3)
	assert_equal((m.id, m.title, m.genre_ids, m.release_year), (3, "Carol", [18], "2015"), "detail payload")
	try:
		client.get_movie_details(99)
	except UpstreamServiceError as e:
		assert_equal(e.service, "tmdb", "service tag")
	else:
		raise AssertionError("missing movie should raise UpstreamServiceError")


def test_fetch_genres_and_predictions():
	session = FakeSession({
		"/genre/movie/list": {"genres": [{"id": 18, "name": "Drama"}, {"id": 10749, "name": "Romance"}]},
		"/search/movie": SEARCH_RESULTS,
	})
	client = make_client(session)
	assert_equal(client.fetch_genres(), {18: "Drama", 10749: "Romance"}, "genre map")
	assert_equal(client.predictions("c"), [], "one character gives no predictions")
	assert_equal(client.predictions("carol", limit=2), [{"id": 1, "title": "Carol Remake"}, {"id": 2, "title": "Carol"}], "first results")
	assert_equal(make_client(FakeSession({}, fail=True)).fetch_genres(), {}, "genres degrade to empty")


def test_rank_candidates_stable():
	a = TMDBMovie(id=1, title="X", vote_count=5)
	b = TMDBMovie(id=2, title="X", vote_count=5)
	assert_equal([m.id for m in rank_candidates([a, b], "x")], [1, 2], "ties keep order")


def test_group_by_genre_fan_out():
	genre_map = {18: "Drama", 10749: "Romance"}
	carol = TMDBMovie(id=1, title="Carol", genre_ids=[18, 10749])
	bound = TMDBMovie(id=2, title="Bound", genre_ids=[80])
	lonely = TMDBMovie(id=3, title="Lonely")
	groups = group_by_genre([[carol, bound], [carol, lonely]], genre_map)
	assert_equal(list(groups), ["Drama", "Romance", "Unknown"], "first-seen order")
	assert_equal([m.id for m in groups["Drama"]], [1], "no duplicate inside a group")
	assert_equal([m.id for m in groups["Romance"]], [1], "multi-membership kept")
	assert_equal([m.id for m in groups["Unknown"]], [2, 3], "unknown ids and no ids")


def test_poster_url():
	assert_equal(TMDBMovie(id=1, title="X", poster_path="/p.jpg").poster_url(), "https://image.tmdb.org/t/p/w500/p.jpg", "poster")
	assert_equal(TMDBMovie(id=1, title="X").poster_url(), None, "no poster")


def main():
	print("Running TMDB client tests...")
	for name, fn in list(globals().items()):
		if name.startswith("test_") and callable(fn):
			fn()
			print(f" - {name} ok")
	print("All TMDB client tests passed!")


if __name__ == '__main__':
	main()
