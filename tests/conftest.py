import threading

import pytest
import requests

from services.core import POKEAPI_BASE
from services.storage import MemoryStore

SPECIES_URL = 'https://pokeapi.co/api/v2/pokemon-species/25/'


class FakeResponse:
    def __init__(self, payload=None, status_code=200):
        self.payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")

    def json(self):
        if isinstance(self.payload, Exception):
            raise self.payload
        return self.payload


class FakeSession:
    """Serves canned PokeAPI payloads keyed by URL and records every call.

    A route value may be a payload, an int status code or an exception to raise.
    Unknown URLs answer 404.
    """

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.calls = []
        self._lock = threading.Lock()

    def get(self, url, timeout=None, params=None):
        with self._lock:
            self.calls.append((url, params))
        value = self.routes.get(url, 404)
        if isinstance(value, Exception) and not isinstance(value, ValueError):
            raise value
        if isinstance(value, int):
            return FakeResponse(None, value)
        return FakeResponse(value)

    def urls(self):
        return [u for u, _ in self.calls]


def pokemon_payload(pid, name, types=('normal',), sprites=None, species_url=None):
    return {
        'id': pid,
        'name': name,
        'types': [{'slot': i + 1, 'type': {'name': t}} for i, t in enumerate(types)],
        'abilities': [{'ability': {'name': 'static'}}],
        'stats': [{'base_stat': 35, 'stat': {'name': 'hp'}}],
        'sprites': sprites if sprites is not None else {'front_default': f'front-{pid}.png'},
        'species': {'url': species_url or f'{POKEAPI_BASE}/pokemon-species/{pid}/'},
        'weight': 10 * pid,
        'height': pid,
    }


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def pikachu_routes():
    return {
        f'{POKEAPI_BASE}/pokemon/25': {
            'id': 25,
            'name': 'pikachu',
            'types': [{'type': {'name': 'electric'}}],
            'abilities': [],
            'stats': [],
            'sprites': {'front_default': 'url1'},
            'species': {'url': SPECIES_URL},
            'weight': 60,
            'height': 4,
        },
        SPECIES_URL: {'flavor_text_entries': []},
    }
