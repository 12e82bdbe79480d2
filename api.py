"""
FastAPI server exposing the movie catalog to a presentation layer.
Endpoints:
- GET /health: basic health check
- GET /movies?min_vote_average=7&genre_ids=28&genre_ids=12: filtered catalog
- GET /movies/search?name=...&from_year=...&to_year=...&genre=...&rating=...: search-box lookup
- GET /movies/{id}: one movie
- GET /pages/{ui_page}: fresh fetch of one UI page with prev/next flags
- GET /favorites, PUT/DELETE /favorites/{id}, POST /favorites/{id}/toggle

Startup loads the offline snapshot (MOVIE_CATALOG_FILE) if present,
otherwise sweeps the remote API when TMDB_API_KEY is set.

Run with: uvicorn api:app --reload
"""

# Import standard libraries for timing
import time  # measure startup latency
from typing import List, Optional  # precise typing for clarity

# Import FastAPI for building the web API and Pydantic for response models
from fastapi import FastAPI, HTTPException, Query  # FastAPI primitives
from fastapi.concurrency import run_in_threadpool  # run blocking calls off the event loop
from pydantic import BaseModel  # response schema definitions

# Import our internal modules for loading, filtering and favorites
from movie_catalog.config import Settings  # env-driven settings
from movie_catalog.data_loader import DataLoader  # snapshot loader
from movie_catalog.errors import CatalogLoadError  # fatal load failure
from movie_catalog.favorites import FavoritesSet  # identity-keyed favorites
from movie_catalog.fetcher import CatalogFetcher, MovieCatalog  # paged sweep
from movie_catalog.filter_engine import filter_movies, quick_search  # filtering
from movie_catalog.models import FilterCriteria, Movie  # data classes
from movie_catalog.page_source import TMDBPageSource  # remote source
from movie_catalog.pagination import PaginationController  # UI pages

# Import loguru for simple, structured console logging
from loguru import logger  # convenient console logger

# Instantiate the FastAPI application with metadata
app = FastAPI(title="Movie Catalog API", version="1.0.0")  # web app

# Globals holding the loaded catalog and session state
SETTINGS: Settings = Settings.from_env()  # configuration
CATALOG: MovieCatalog = MovieCatalog()  # every movie, keyed by id
FAVORITES: FavoritesSet = FavoritesSet()  # favorites, keyed by id
FETCHER: Optional[CatalogFetcher] = None  # remote pages; None when offline
STARTUP_TIME_S: float = 0.0  # how long startup took


# Pydantic model that describes the shape of a single movie in responses
class MovieOut(BaseModel):
	id: int
	title: str
	original_title: str
	original_language: str
	overview: str
	release_date: str
	vote_average: float
	vote_count: int
	popularity: float
	genre_ids: List[int]
	adult: bool
	video: bool
	favorite: bool = False  # lets a UI render like/unlike


class MoviesResponse(BaseModel):
	count: int
	results: List[MovieOut]


class PageResponse(BaseModel):
	ui_page: int
	total_ui_pages: int
	has_previous: bool
	has_next: bool
	source_pages: List[int]
	count: int
	results: List[MovieOut]


class FavoriteStatus(BaseModel):
	id: int
	favorite: bool  # membership after the call
	changed: bool  # whether the call modified the set


def _movie_out(movie: Movie) -> MovieOut:
	return MovieOut(**movie.to_dict(), favorite=FAVORITES.contains(movie))


def _movies_response(movies: List[Movie]) -> MoviesResponse:
	return MoviesResponse(count=len(movies), results=[_movie_out(m) for m in movies])


def _require_movie(movie_id: int) -> Movie:
	movie = CATALOG.get(movie_id)
	if movie is None:
		raise HTTPException(status_code=404, detail=f"Movie {movie_id} not found")
	return movie


# FastAPI startup hook to load the catalog once
@app.on_event("startup")
async def startup_event():
	"""Load the catalog from the snapshot file or the remote API."""
	global FETCHER, STARTUP_TIME_S  # refer to module-level globals
	start = time.time()  # start timer for startup latency

	if SETTINGS.api_key:
		FETCHER = CatalogFetcher(TMDBPageSource(SETTINGS))

	if SETTINGS.catalog_file.exists():
		try:
			CATALOG.add_all(DataLoader().load_movies_from_json(SETTINGS.catalog_file))
		except CatalogLoadError as e:
			logger.error(f"[API] {e}")
	elif FETCHER is not None:
		# blocking HTTP sweep, kept off the event loop
		await run_in_threadpool(FETCHER.fetch_all, SETTINGS.total_pages, catalog=CATALOG)
	else:
		logger.warning("[API] No catalog file and no TMDB_API_KEY; serving an empty catalog")

	STARTUP_TIME_S = time.time() - start  # elapsed seconds
	logger.info(f"[API] Startup complete in {STARTUP_TIME_S:.2f}s with {len(CATALOG)} movies.")


# Simple health endpoint for readiness checks
@app.get("/health")
async def health():
	"""Return minimal health info for liveness/readiness probes."""
	return {
		"status": "ok",
		"movies": len(CATALOG),
		"favorites": len(FAVORITES),
		"remote_source": FETCHER is not None,
		"startup_seconds": round(STARTUP_TIME_S, 2),
	}


@app.get("/movies", response_model=MoviesResponse)
async def list_movies(
	title: Optional[str] = None,
	partial_title: Optional[str] = None,
	vote_average: Optional[float] = None,
	min_vote_average: Optional[float] = None,
	max_vote_average: Optional[float] = None,
	genre_ids: Optional[List[int]] = Query(None),
	release_date: Optional[str] = None,
	release_date_after: Optional[str] = None,
	release_date_before: Optional[str] = None,
):
	"""Filter the whole catalog; every parameter is optional and they combine with AND."""
	criteria = FilterCriteria(
		title=title,
		partial_title=partial_title,
		exact_vote_average=vote_average,
		min_vote_average=min_vote_average,
		max_vote_average=max_vote_average,
		genre_ids=genre_ids,
		release_date=release_date,
		release_date_after=release_date_after,
		release_date_before=release_date_before,
	)
	return _movies_response(filter_movies(CATALOG.movies(), criteria))


@app.get("/movies/search", response_model=MoviesResponse)
async def search_movies(
	name: Optional[str] = None,
	from_year: Optional[int] = None,
	to_year: Optional[int] = None,
	genre: Optional[str] = None,
	rating: Optional[float] = None,
):
	"""Search-box lookup: name, year window, genre name and minimum rating."""
	results = quick_search(
		CATALOG.movies(), name=name, from_year=from_year, to_year=to_year, genre_name=genre, min_rating=rating
	)
	return _movies_response(results)


@app.get("/movies/{movie_id}", response_model=MovieOut)
async def get_movie(movie_id: int):
	return _movie_out(_require_movie(movie_id))


@app.get("/pages/{ui_page}", response_model=PageResponse)
def get_page(ui_page: int):
	"""Fetch one UI page's block of source pages afresh."""
	if FETCHER is None:
		raise HTTPException(status_code=503, detail="No remote catalog source configured")
	pagination = PaginationController(SETTINGS.pages_per_ui_page, SETTINGS.total_pages)
	if not pagination.go_to(ui_page):
		raise HTTPException(status_code=404, detail=f"UI page {ui_page} out of range 1..{pagination.total_ui_pages}")
	movies = pagination.load(FETCHER)
	return PageResponse(
		ui_page=pagination.current_page,
		total_ui_pages=pagination.total_ui_pages,
		has_previous=pagination.has_previous,
		has_next=pagination.has_next,
		source_pages=list(pagination.source_pages()),
		count=len(movies),
		results=[_movie_out(m) for m in movies],
	)


@app.get("/favorites", response_model=MoviesResponse)
async def list_favorites():
	return _movies_response(FAVORITES.list())


@app.put("/favorites/{movie_id}", response_model=FavoriteStatus)
async def add_favorite(movie_id: int):
	changed = FAVORITES.add(_require_movie(movie_id))
	return FavoriteStatus(id=movie_id, favorite=True, changed=changed)


@app.delete("/favorites/{movie_id}", response_model=FavoriteStatus)
async def remove_favorite(movie_id: int):
	# membership is by id, so a bare record is enough to remove
	changed = FAVORITES.remove(Movie(id=movie_id))
	return FavoriteStatus(id=movie_id, favorite=False, changed=changed)


@app.post("/favorites/{movie_id}/toggle", response_model=FavoriteStatus)
async def toggle_favorite(movie_id: int):
	favorite = FAVORITES.toggle(_require_movie(movie_id))
	return FavoriteStatus(id=movie_id, favorite=favorite, changed=True)
