import logging
import os

from flask import Flask

from screens.capture import bp as capture_bp, CaptureScreen, RouteNavigator
from screens.pokedex import bp as pokedex_bp
from services.camera import UploadCamera
from services.pokemon import CatalogClient
from services.storage import JsonFileStore, MemoryStore


def create_app(config=None):
    app = Flask(__name__)
    app.config['JSON_SORT_KEYS'] = False

    # Ensure a stable secret key; prefer environment variable, fall back to a dev default.
    app.secret_key = os.environ.get('SECRET_KEY') or 'pokemon-capture-dev-secret-key'

    app.config['STORE_PATH'] = os.environ.get('STORE_PATH') or None
    app.config['CAPTURE_DIR'] = os.environ.get('CAPTURE_DIR') or os.path.join(os.getcwd(), 'captures')
    app.config['CAMERA_PLATFORM'] = os.environ.get('CAMERA_PLATFORM') or 'ios'
    app.config.update(config or {})

    store = app.config.get('STORE')
    if store is None:
        path = app.config['STORE_PATH']
        store = JsonFileStore(path) if path else MemoryStore()
    camera = app.config.get('CAMERA') or UploadCamera(
        app.config['CAPTURE_DIR'], platform=app.config['CAMERA_PLATFORM']
    )
    catalog = CatalogClient(store, session=app.config.get('HTTP_SESSION'))

    app.extensions['catalog'] = catalog
    app.extensions['capture_screen'] = CaptureScreen(
        camera, catalog, store, navigator=RouteNavigator()
    )

    app.register_blueprint(pokedex_bp)
    app.register_blueprint(capture_bp)

    # Mount the capture screen once on the first incoming request
    @app.before_request
    def _mount_capture_screen():
        app.extensions['capture_screen'].mount()

    return app


if __name__ == '__main__':
    logging.basicConfig(
        level=(os.environ.get('LOG_LEVEL') or 'INFO').upper(),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )
    port = int(os.environ.get('PORT', 5000))
    create_app().run(host='0.0.0.0', port=port, debug=True)
