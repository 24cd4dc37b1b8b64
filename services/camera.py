import logging
import os
import uuid
from collections import namedtuple

logger = logging.getLogger(__name__)

GRANTED = 'granted'
DENIED = 'denied'

Photo = namedtuple('Photo', ['path'])


def normalize_photo_uri(path: str, platform: str) -> str:
    """Android hands back bare paths that need the file scheme; iOS does not."""
    if (platform or '').lower() == 'android':
        return 'file://' + path
    return path


class UploadCamera:
    """Camera capability fed by photos uploaded from the client device.

    Permission is granted when the upload directory is usable. Each still
    capture is written under a fresh UUID file name.
    """

    def __init__(self, upload_dir, platform: str = 'ios'):
        self.upload_dir = os.fspath(upload_dir)
        self.platform = platform

    def request_permission(self) -> str:
        try:
            os.makedirs(self.upload_dir, exist_ok=True)
        except OSError as e:
            logger.warning('Capture directory %s unavailable: %s', self.upload_dir, e)
            return DENIED
        return GRANTED if os.access(self.upload_dir, os.W_OK) else DENIED

    def take_photo(self, flash: str = 'off', data: bytes = b'', ext: str = '.jpg') -> Photo:
        if not data:
            raise ValueError('No photo data received')
        if not ext.startswith('.'):
            ext = '.' + ext
        path = os.path.join(self.upload_dir, f"{uuid.uuid4().hex}{ext.lower()}")
        with open(path, 'wb') as fh:
            fh.write(data)
        logger.debug('Stored photo %s (flash=%s)', path, flash)
        return Photo(path)
