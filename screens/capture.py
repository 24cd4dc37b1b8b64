import logging
import os
import threading
from concurrent.futures import ThreadPoolExecutor

from flask import Blueprint, current_app, jsonify, redirect, request, url_for

from services.camera import GRANTED, normalize_photo_uri
from services.captures import append_capture, load_captures, make_capture_record

logger = logging.getLogger(__name__)

bp = Blueprint('capture', __name__)

AWAITING_PERMISSION = 'awaiting_permission'
PERMISSION_DENIED = 'permission_denied'
READY = 'ready'

GALLERY_ROUTE = 'ProfileGallery'

STATUS_MESSAGES = {
    AWAITING_PERMISSION: 'Loading camera...',
    PERMISSION_DENIED: 'No camera permission. Grant permissions in settings.',
    READY: '',
}

CAPTURED = ('Captured!', 'Pokemon saved to your gallery.')
CAPTURE_FAILED = ('Error', 'Could not take picture. Check camera permission.')

# Overlay refreshes run on their own small pool
OVERLAY_EXECUTOR = ThreadPoolExecutor(max_workers=2)


class CaptureScreen:
    """Camera capture flow: permission, sprite overlay and persisting captures.

    The camera, catalog client, store and navigator are collaborators passed
    in by the caller; this class only sequences them.
    """

    def __init__(self, camera, catalog, store, navigator=None, executor=None,
                 default_id: int = 25):
        self.camera = camera
        self.catalog = catalog
        self.store = store
        self.navigator = navigator
        self.executor = executor or OVERLAY_EXECUTOR
        self.default_id = default_id

        self.state = AWAITING_PERMISSION
        self.mounted = False
        self.selected_id = None
        self.sprite = None
        self.last_capture = None
        self._overlay_future = None
        self._lock = threading.Lock()

    @property
    def status_message(self) -> str:
        return STATUS_MESSAGES[self.state]

    def mount(self):
        """One-time permission request, then load the default overlay."""
        with self._lock:
            if self.mounted:
                return self.state
            self.mounted = True
        try:
            status = self.camera.request_permission()
        except Exception as e:
            logger.error('camera permission request failed: %s', e)
            status = None
        self.state = READY if status == GRANTED else PERMISSION_DENIED
        self.select(self.default_id)
        return self.state

    def select(self, pokemon_id):
        with self._lock:
            self.selected_id = pokemon_id
            self.sprite = None
            self._overlay_future = self.executor.submit(self._refresh_overlay, pokemon_id)
        return self._overlay_future

    def _refresh_overlay(self, pokemon_id):
        try:
            data = self.catalog.fetch_basic(pokemon_id)
        except Exception as e:
            logger.warning('Failed to fetch pokemon sprite: %s', e)
            return
        with self._lock:
            # A newer selection wins over a late response
            if self.selected_id == pokemon_id:
                self.sprite = (data or {}).get('sprite') or None

    def wait_for_overlay(self, timeout=None):
        future = self._overlay_future
        if future is not None:
            future.result(timeout=timeout)
        return self.sprite

    def take_capture(self, **photo_kwargs):
        """Take a still, persist its capture record and return (ok, title, message)."""
        if self.state != READY:
            return (False,) + CAPTURE_FAILED
        try:
            photo = self.camera.take_photo(flash='off', **photo_kwargs)
            photo_uri = normalize_photo_uri(photo.path, getattr(self.camera, 'platform', ''))
            with self._lock:
                pokemon_id, sprite = self.selected_id, self.sprite
            entry = make_capture_record(
                pokemon_id,
                f"pokemon-{pokemon_id}",
                sprite,
                photo_uri,
            )
            append_capture(self.store, entry)
        except Exception as e:
            logger.error('capture err: %s', e)
            return (False,) + CAPTURE_FAILED
        self.last_capture = entry
        return (True,) + CAPTURED

    def open_gallery(self):
        if self.navigator is None:
            return None
        return self.navigator.navigate(GALLERY_ROUTE)


class RouteNavigator:
    """Resolves screen route names to Flask endpoints."""

    routes = {GALLERY_ROUTE: 'capture.captures'}

    def navigate(self, name: str):
        return redirect(url_for(self.routes[name]))


def _screen() -> CaptureScreen:
    return current_app.extensions['capture_screen']


@bp.route('/api/capture/state')
def state():
    screen = _screen()
    return jsonify({
        'state': screen.state,
        'selectedId': screen.selected_id,
        'sprite': screen.sprite,
        'message': screen.status_message,
    })


@bp.route('/api/capture/select', methods=['POST'])
def select():
    data = request.get_json(silent=True) or {}
    try:
        pid = int(data.get('id'))
    except (TypeError, ValueError):
        return jsonify({'error': 'A numeric id is required'}), 400
    screen = _screen()
    screen.select(pid)
    return jsonify({'selectedId': pid})


@bp.route('/api/capture', methods=['POST'])
def capture():
    screen = _screen()
    upload = request.files.get('photo')
    data = upload.read() if upload else b''
    ext = os.path.splitext(upload.filename or '')[1] if upload else ''
    ok, title, message = screen.take_capture(data=data, ext=ext or '.jpg')
    body = {'ok': ok, 'title': title, 'message': message}
    if not ok:
        return jsonify(body), 500
    body['capture'] = screen.last_capture
    return jsonify(body)


@bp.route('/api/captures')
def captures():
    try:
        return jsonify(load_captures(_screen().store))
    except Exception as e:
        return jsonify({"error": str(e)}), 500


@bp.route('/api/capture/gallery')
def gallery():
    return _screen().open_gallery()
