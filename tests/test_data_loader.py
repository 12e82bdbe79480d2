"""
Tests for DataLoader: snapshot loading, record parsing and genre lookups.
"""

import json

import pytest

from movie_catalog.data_loader import DataLoader
from movie_catalog.errors import CatalogLoadError
from movie_catalog.models import Movie

from conftest import raw_record


def write_json(path, payload):
	path.write_text(json.dumps(payload), encoding='utf-8')
	return path


def test_load_snapshot(tmp_path):
	path = write_json(tmp_path / 'movies.json', {'results': [raw_record(1, 'Alpha'), raw_record(2, 'Beta', genre_ids=[35, 18])]})
	movies = DataLoader().load_movies_from_json(path)

	assert [m.title for m in movies] == ['Alpha', 'Beta']
	assert movies[1].genre_ids == (35, 18)
	assert movies[0].original_language == 'en'
	assert movies[0].vote_count == 100
	assert movies[0].popularity == 12.5


def test_missing_file_is_fatal(tmp_path):
	with pytest.raises(CatalogLoadError):
		DataLoader().load_movies_from_json(tmp_path / 'nope.json')


def test_invalid_json_is_fatal(tmp_path):
	path = tmp_path / 'broken.json'
	path.write_text('{"results": [', encoding='utf-8')
	with pytest.raises(CatalogLoadError):
		DataLoader().load_movies_from_json(path)


def test_document_without_results_is_fatal(tmp_path):
	path = write_json(tmp_path / 'other.json', {'page': 1})
	with pytest.raises(CatalogLoadError):
		DataLoader().load_movies_from_json(path)


def test_malformed_records_are_skipped():
	records = [
		raw_record(1, 'Good'),
		{'title': 'No id'},
		raw_record(3, 'Bad vote', vote_average='high'),
		'not an object',
		raw_record(5, 'Bad genres', genre_ids='28'),
		raw_record(6, 'Also good'),
	]
	movies = DataLoader().parse_results(records)
	assert [m.id for m in movies] == [1, 6]


def test_non_finite_numbers_are_skipped(tmp_path):
	path = tmp_path / 'movies.json'
	path.write_text('{"results": [{"id": 1}, {"id": 2, "vote_count": Infinity}, {"id": 3, "popularity": -Infinity}]}', encoding='utf-8')
	movies = DataLoader().load_movies_from_json(path)
	assert [m.id for m in movies] == [1]


def test_absent_or_null_fields_get_defaults():
	movies = DataLoader().parse_results([{'id': 7, 'title': 'Sparse', 'genre_ids': None, 'release_date': None}])
	movie = movies[0]
	assert movie.genre_ids == ()
	assert movie.release_date == ''
	assert movie.vote_average == 0.0
	assert movie.adult is False


def test_snapshot_round_trip(tmp_path):
	loader = DataLoader()
	original = [Movie(id=1, title='Alpha', genre_ids=(28, 12), vote_average=8.0, release_date='2019-01-01')]
	path = loader.save_movies_to_json(original, tmp_path / 'out' / 'movies.json')

	document = json.loads(path.read_text(encoding='utf-8'))
	assert document['results'][0]['genre_ids'] == [28, 12]
	assert loader.load_movies_from_json(path) == original


def test_genre_lookup():
	loader = DataLoader()
	assert loader.genre_id_for('Action') == 28
	assert loader.genre_id_for('science fiction') == 878
	assert loader.genre_id_for('sci-fi') == 878
	assert loader.genre_id_for('Tv movie') == 10770
	assert loader.genre_id_for('cartoons') is None
	assert loader.genre_name_for(35) == 'Comedy'
