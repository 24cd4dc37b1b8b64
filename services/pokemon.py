import json
import logging
from concurrent.futures import ThreadPoolExecutor

import requests

from .core import (
    POKEAPI_BASE,
    INITIAL_POKEMON_LIMIT,
    POKEMON_LIST_CACHE_KEY,
    POKEMON_DETAIL_CACHE_PREFIX,
    INDEX_TIMEOUT,
    DETAIL_TIMEOUT,
)
from .media import pick_sprite

logger = logging.getLogger(__name__)


def detail_cache_key(id_or_name) -> str:
    # No canonicalization: 25 and 'pikachu' are distinct keys
    return f"{POKEMON_DETAIL_CACHE_PREFIX}{id_or_name}"


class CatalogClient:
    """Read-through cached access to the PokeAPI catalog.

    ``store`` is any object with ``get(key)`` / ``set(key, value)`` over JSON
    strings. ``session`` only needs a requests-style ``get``; it defaults to the
    ``requests`` module itself. Failures never escape: callers get ``None`` or
    an empty list.
    """

    def __init__(self, store, session=None, base: str = POKEAPI_BASE,
                 limit: int = INITIAL_POKEMON_LIMIT):
        self.store = store
        self.session = session or requests
        self.base = base.rstrip('/')
        self.limit = limit

    def _get_json(self, url: str, timeout: int = DETAIL_TIMEOUT, **kwargs):
        r = self.session.get(url, timeout=timeout, **kwargs)
        r.raise_for_status()
        return r.json()

    def _read_cache(self, key: str):
        try:
            raw = self.store.get(key)
            if raw:
                return json.loads(raw)
        except Exception as e:
            logger.warning('Could not read cache %s: %s', key, e)
        return None

    def _write_cache(self, key: str, value) -> None:
        try:
            self.store.set(key, json.dumps(value))
        except Exception as e:
            logger.warning('Could not write cache %s: %s', key, e)

    def fetch_list(self):
        """Return the first page of the catalog with full details.
        Served from cache when present; otherwise every entry's detail is
        fetched in parallel and the surviving entries are cached together.
        """
        cached = self._read_cache(POKEMON_LIST_CACHE_KEY)
        if isinstance(cached, list):
            logger.debug('Returning full Pokedex from cache.')
            return cached

        try:
            logger.info('Fetching fresh Pokedex list...')
            data = self._get_json(
                f"{self.base}/pokemon",
                timeout=INDEX_TIMEOUT,
                params={'limit': self.limit, 'offset': 0},
            )
            results = data.get('results', []) or []
            # One worker per entry: the whole page is requested at once
            with ThreadPoolExecutor(max_workers=max(len(results), 1)) as pool:
                futures = [pool.submit(self.fetch_detail, item.get('name'))
                           for item in results]
                # Keep index order; fetch_detail never raises
                entries = [f.result() for f in futures]
            valid = [p for p in entries if p is not None]
        except Exception as e:
            logger.error('Error fetching Pokemon list: %s', e)
            return []

        self._write_cache(POKEMON_LIST_CACHE_KEY, valid)
        logger.info('Fetched and cached new full list (%d entries).', len(valid))
        return valid

    def fetch_detail(self, id_or_name):
        """Return the full catalog entry for an id or name, or None on failure."""
        key = detail_cache_key(id_or_name)
        cached = self._read_cache(key)
        if isinstance(cached, dict):
            return cached

        try:
            j = self._get_json(f"{self.base}/pokemon/{id_or_name}")

            # Species data is cosmetic (flavor text); degrade to empty
            species = {}
            try:
                species = self._get_json((j.get('species') or {})['url'])
            except Exception as e:
                logger.warning('Failed to fetch species data for %s: %s', id_or_name, e)

            entry = {
                'id': j['id'],
                'name': j['name'],
                'types': [t['type']['name'] for t in j.get('types', [])],
                'abilities': [a['ability']['name'] for a in j.get('abilities', [])],
                'stats': j.get('stats', []),
                'spriteUrl': (j.get('sprites') or {}).get('front_default'),
                'speciesData': species,
                'weight': j.get('weight'),
                'height': j.get('height'),
            }
        except Exception as e:
            logger.error('Error fetching Pokemon detail for %s: %s', id_or_name, e)
            return None

        self._write_cache(key, entry)
        return entry

    def fetch_basic(self, id_or_name):
        """Uncached lightweight lookup for overlays: id, name, sprite, types."""
        try:
            j = self._get_json(f"{self.base}/pokemon/{id_or_name}")
            return {
                'id': j['id'],
                'name': j['name'],
                'sprite': pick_sprite(j.get('sprites')),
                'types': [(t.get('type') or {}).get('name') for t in j.get('types') or []],
            }
        except Exception as e:
            logger.warning('poke api error for %s: %s', id_or_name, e)
            return None
