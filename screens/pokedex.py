from flask import Blueprint, current_app, jsonify, request

from services.core import SUPPORTED_LANGS
from services.entries import get_flavor_text

bp = Blueprint('pokedex', __name__, url_prefix='/api/pokemon')


def _catalog():
    return current_app.extensions['catalog']


@bp.route('')
def pokemon_list():
    return jsonify(_catalog().fetch_list())


@bp.route('/<id_or_name>')
def pokemon_detail(id_or_name):
    entry = _catalog().fetch_detail(id_or_name)
    if entry is None:
        return jsonify({"error": f"Could not load Pokémon {id_or_name}."}), 404
    return jsonify(entry)


@bp.route('/<id_or_name>/basic')
def pokemon_basic(id_or_name):
    data = _catalog().fetch_basic(id_or_name)
    if data is None:
        return jsonify({"error": f"Could not load Pokémon {id_or_name}."}), 404
    return jsonify(data)


@bp.route('/<id_or_name>/entry')
def pokedex_entry(id_or_name):
    lang = (request.args.get('lang') or 'en').lower()
    if lang not in SUPPORTED_LANGS:
        lang = 'en'
    entry = _catalog().fetch_detail(id_or_name)
    if entry is None:
        return jsonify({"error": f"Could not load Pokémon {id_or_name}."}), 404
    return jsonify({'id': entry['id'], 'lang': lang, 'entry': get_flavor_text(entry, lang)})
