"""
Shared fixtures: small catalogs and fake page sources (no network).
"""

import pytest

from movie_catalog.errors import PageFetchError
from movie_catalog.models import Movie


def make_movie(movie_id, title, vote=5.0, genres=(), date='2020-01-01', **extra):
	return Movie(id=movie_id, title=title, vote_average=vote, genre_ids=tuple(genres), release_date=date, **extra)


def raw_record(movie_id, title='Movie', **extra):
	record = {
		'id': movie_id,
		'title': title,
		'original_title': title,
		'original_language': 'en',
		'overview': f"About {title}",
		'release_date': '2020-01-01',
		'vote_average': 6.5,
		'vote_count': 100,
		'popularity': 12.5,
		'genre_ids': [28],
		'adult': False,
		'video': False,
	}
	record.update(extra)
	return record


class FakePageSource:
	"""Serves `per_page` records per page; ids are unique per page unless overlap is set."""

	def __init__(self, total_pages=5, per_page=3, failing=(), overlap=False):
		self.total_pages = total_pages
		self.per_page = per_page
		self.failing = set(failing)
		self.overlap = overlap
		self.requested = []

	def fetch_page(self, page):
		self.requested.append(page)
		if page in self.failing:
			raise PageFetchError(page, "HTTP 500", status_code=500)
		if self.overlap:
			# every page repeats id 1 with a different title
			records = [raw_record(1, title=f"Shared from page {page}")]
		else:
			records = []
		base = page * 1000
		records.extend(raw_record(base + i, title=f"Page {page} movie {i}") for i in range(self.per_page))
		return records


@pytest.fixture
def catalog():
	return [
		make_movie(1, "Alpha", vote=8.0, genres=[28], date="2019-01-01"),
		make_movie(2, "Beta", vote=5.0, genres=[35], date="2021-06-01"),
	]


@pytest.fixture
def library():
	return [
		make_movie(10, "The Dark Knight", vote=8.5, genres=[28, 80, 18], date="2008-07-16"),
		make_movie(11, "Inception", vote=8.4, genres=[28, 878, 12], date="2010-07-15"),
		make_movie(12, "Knives Out", vote=7.8, genres=[35, 80, 9648], date="2019-11-27"),
		make_movie(13, "Untitled Project", vote=0.0, genres=[], date=""),
		make_movie(14, "Dark Waters", vote=7.6, genres=[18], date="2019-11-22"),
	]
