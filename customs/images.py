from __future__ import annotations

import logging
import os
import uuid
from urllib.parse import unquote, urlsplit

from django.conf import settings
from django.core.files.base import ContentFile, File
from django.core.files.storage import default_storage

logger = logging.getLogger(__name__)


class ImageStore:
    """Stores custom cocktail images and hands back their public URLs."""

    def __init__(self, storage=None, directory: str | None = None):
        self.storage = storage if storage is not None else default_storage
        self.directory = directory or getattr(settings, 'CUSTOM_IMAGE_DIR', 'customs')

    def upload(self, image) -> str:
        if isinstance(image, (bytes, bytearray)):
            image = ContentFile(bytes(image))
        elif not isinstance(image, File):
            image = File(image)
        _, ext = os.path.splitext(getattr(image, 'name', '') or '')
        name = f"{self.directory}/{uuid.uuid4().hex}{ext.lower()}"
        saved = self.storage.save(name, image)
        url = self.storage.url(saved)
        logger.debug("Uploaded image %s", url)
        return url

    def delete(self, url: str | None) -> None:
        if not url:
            return
        name = self._name_from_url(url)
        if not name:
            logger.warning("Not deleting image outside the %s storage directory: %s", self.directory, url)
            return
        self.storage.delete(name)
        logger.debug("Deleted image %s", url)

    def _name_from_url(self, url):
        if not url:
            return None
        base = getattr(self.storage, 'base_url', None) or settings.MEDIA_URL
        # relative base urls match the path of absolute image urls
        if not urlsplit(base).netloc:
            url = urlsplit(url).path
        if not url.startswith(base):
            return None
        name = unquote(url[len(base):])
        if not name.startswith(f"{self.directory}/"):
            return None
        return name
