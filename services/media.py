def pick_sprite(sprites):
    """Return the best overlay image URL from a PokeAPI ``sprites`` object.

    Prefers official artwork, then the default front sprite, else None.
    """
    if not isinstance(sprites, dict):
        return None
    other = sprites.get('other') or {}
    art = (other.get('official-artwork') or {}).get('front_default')
    if not art:
        art = sprites.get('front_default')
    return art or None
