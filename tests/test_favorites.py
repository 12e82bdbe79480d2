"""
Tests for FavoritesSet: membership by movie id.
"""

from movie_catalog.favorites import FavoritesSet
from movie_catalog.models import Movie


def test_duplicate_id_is_a_no_op():
	favorites = FavoritesSet()
	assert favorites.add(Movie(id=5, title='A'))
	assert not favorites.add(Movie(id=5, title='A-updated'))

	assert len(favorites) == 1
	assert favorites.list()[0].title == 'A'


def test_membership_ignores_other_fields():
	favorites = FavoritesSet()
	favorites.add(Movie(id=5, title='A', popularity=1.0))
	assert Movie(id=5, title='A', popularity=99.0) in favorites
	assert not favorites.contains(Movie(id=6, title='A', popularity=1.0))


def test_remove_by_id():
	favorites = FavoritesSet()
	favorites.add(Movie(id=5, title='A'))
	assert not favorites.remove(Movie(id=6))
	assert favorites.remove(Movie(id=5, title='different copy'))
	assert len(favorites) == 0
	assert not favorites.remove(Movie(id=5))


def test_toggle():
	favorites = FavoritesSet()
	movie = Movie(id=1, title='A')
	assert favorites.toggle(movie) is True
	assert favorites.toggle(Movie(id=1, title='A again')) is False
	assert movie not in favorites


def test_list_keeps_insertion_order():
	favorites = FavoritesSet()
	for movie_id in (3, 1, 2):
		favorites.add(Movie(id=movie_id))
	assert favorites.ids() == [3, 1, 2]
	assert [m.id for m in favorites] == [3, 1, 2]
	favorites.clear()
	assert favorites.list() == []
