"""
Tests for the FastAPI service. State is injected directly; only the startup test runs the startup hook.
"""

import asyncio
import inspect

import pytest
from fastapi.testclient import TestClient

import api
from movie_catalog.favorites import FavoritesSet
from movie_catalog.fetcher import CatalogFetcher, MovieCatalog

from conftest import FakePageSource


@pytest.fixture
def client(library, monkeypatch):
	monkeypatch.setattr(api, 'CATALOG', MovieCatalog(library))
	monkeypatch.setattr(api, 'FAVORITES', FavoritesSet())
	monkeypatch.setattr(api, 'FETCHER', None)
	return TestClient(api.app)


def result_titles(response):
	assert response.status_code == 200
	return [m['title'] for m in response.json()['results']]


def test_health(client):
	body = client.get('/health').json()
	assert body['status'] == 'ok'
	assert body['movies'] == 5
	assert body['remote_source'] is False


def test_unfiltered_catalog(client, library):
	assert result_titles(client.get('/movies')) == [m.title for m in library]


def test_filters_combine(client):
	response = client.get('/movies', params={'title': 'dark', 'genre_ids': [28, 12], 'min_vote_average': 8})
	assert result_titles(response) == ['The Dark Knight']
	response = client.get('/movies', params={'vote_average': 7.5})
	assert result_titles(response) == ['Dark Waters']
	response = client.get('/movies', params={'release_date_after': '2010-07-15', 'release_date_before': '2019-11-27'})
	assert result_titles(response) == ['Dark Waters']


def test_quick_search(client):
	response = client.get('/movies/search', params={'name': 'dark', 'from_year': 2009, 'to_year': 2020})
	assert result_titles(response) == ['Dark Waters']
	response = client.get('/movies/search', params={'genre': 'Mystery'})
	assert result_titles(response) == ['Knives Out']


def test_get_movie(client):
	body = client.get('/movies/11').json()
	assert body['title'] == 'Inception'
	assert body['genre_ids'] == [28, 878, 12]
	assert body['favorite'] is False
	assert client.get('/movies/999').status_code == 404


def test_favorites_round_trip(client):
	assert client.put('/favorites/11').json() == {'id': 11, 'favorite': True, 'changed': True}
	assert client.put('/favorites/11').json()['changed'] is False
	assert client.get('/movies/11').json()['favorite'] is True
	assert result_titles(client.get('/favorites')) == ['Inception']

	assert client.post('/favorites/12/toggle').json()['favorite'] is True
	assert client.post('/favorites/12/toggle').json()['favorite'] is False

	assert client.delete('/favorites/11').json() == {'id': 11, 'favorite': False, 'changed': True}
	assert client.delete('/favorites/11').json()['changed'] is False
	assert result_titles(client.get('/favorites')) == []


def test_unknown_favorite_is_404(client):
	assert client.put('/favorites/999').status_code == 404
	assert client.post('/favorites/999/toggle').status_code == 404


def test_pages_need_a_remote_source(client):
	assert client.get('/pages/1').status_code == 503


def test_pages(client, monkeypatch):
	monkeypatch.setattr(api, 'FETCHER', CatalogFetcher(FakePageSource(per_page=1)))
	monkeypatch.setattr(api.SETTINGS, 'pages_per_ui_page', 2)
	monkeypatch.setattr(api.SETTINGS, 'total_pages', 6)

	body = client.get('/pages/2').json()
	assert body['ui_page'] == 2
	assert body['total_ui_pages'] == 3
	assert body['has_previous'] is True and body['has_next'] is True
	assert body['source_pages'] == [3, 4]
	assert [m['id'] for m in body['results']] == [3000, 4000]

	assert client.get('/pages/4').status_code == 404
	assert client.get('/pages/0').status_code == 404


def test_page_fetch_runs_off_the_event_loop():
	assert not inspect.iscoroutinefunction(api.get_page)


def test_startup_sweeps_remote_source_without_snapshot(tmp_path, monkeypatch):
	monkeypatch.setattr(api, 'CATALOG', MovieCatalog())
	monkeypatch.setattr(api, 'STARTUP_TIME_S', 0.0)
	monkeypatch.setattr(api, 'FETCHER', None)
	monkeypatch.setattr(api.SETTINGS, 'api_key', 'secret')
	monkeypatch.setattr(api.SETTINGS, 'total_pages', 3)
	monkeypatch.setattr(api.SETTINGS, 'catalog_file', tmp_path / 'absent.json')
	monkeypatch.setattr(api, 'TMDBPageSource', lambda settings: FakePageSource(total_pages=3, per_page=2))

	asyncio.run(api.startup_event())
	assert len(api.CATALOG) == 6
	assert api.FETCHER is not None
