from .core import SUPPORTED_LANGS


def _clean(txt) -> str:
    if not isinstance(txt, str):
        txt = str(txt or '')
    # Replace form feed and newlines with spaces, compress spaces
    txt = txt.replace('\f', ' ').replace('\n', ' ').replace('\r', ' ')
    return ' '.join(txt.split())


def get_flavor_text(entry, lang: str = 'en') -> str:
    """Pick a Pokédex flavor text from a catalog entry's species data.
    Tries the requested language, then English, then any available.
    Returns '' when the entry carries no species text.
    """
    l = lang.lower() if isinstance(lang, str) else 'en'
    if l not in SUPPORTED_LANGS:
        l = 'en'
    species = (entry or {}).get('speciesData') or {}
    entries = species.get('flavor_text_entries', []) or []
    for want in (l, 'en'):
        for e in entries:
            lang_name = (e.get('language') or {}).get('name')
            if lang_name == want and e.get('flavor_text'):
                return _clean(e['flavor_text'])
    for e in entries:
        if e.get('flavor_text'):
            return _clean(e['flavor_text'])
    return ''
