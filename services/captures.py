import json
import logging
import time

from .core import CAPTURES_KEY

logger = logging.getLogger(__name__)


def now_ms() -> int:
    return int(time.time() * 1000)


def make_capture_record(pokemon_id, name, sprite, photo_uri, timestamp=None):
    return {
        'id': pokemon_id,
        'name': name,
        'sprite': sprite,
        'photoUri': photo_uri,
        'timestamp': now_ms() if timestamp is None else int(timestamp),
    }


def load_captures(store):
    """Return the persisted capture list; absent or unreadable data yields []."""
    raw = store.get(CAPTURES_KEY)
    if not raw:
        return []
    try:
        data = json.loads(raw)
    except ValueError:
        logger.warning('Ignoring unparsable capture list')
        return []
    return data if isinstance(data, list) else []


def append_capture(store, record):
    """Append one record and write the whole list back.
    Storage errors propagate to the caller.
    """
    captures = load_captures(store)
    captures.append(record)
    store.set(CAPTURES_KEY, json.dumps(captures))
    return captures
