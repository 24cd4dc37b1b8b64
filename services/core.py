# Constants
POKEAPI_BASE = 'https://pokeapi.co/api/v2'
SUPPORTED_LANGS = {'en', 'es', 'fr', 'de'}

# First page of the national dex shown in the catalog
INITIAL_POKEMON_LIMIT = 21

# Storage keys (bump the list suffix to force a refresh)
POKEMON_LIST_CACHE_KEY = 'pokemon_list_cache_v2'
POKEMON_DETAIL_CACHE_PREFIX = 'pokemon_detail_'
CAPTURES_KEY = 'captures'

# Request timeouts (seconds)
INDEX_TIMEOUT = 20
DETAIL_TIMEOUT = 12
