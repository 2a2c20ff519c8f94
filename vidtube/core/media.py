# vidtube/core/media.py

import logging
import os
import shutil
import uuid
from pathlib import Path
from fastapi import UploadFile

from vidtube.config import Settings


logger = logging.getLogger(__name__)


class MediaStore:
    """
    Keeps uploaded avatars and cover images on local disk
    and hands back the URL they are served under.
    """

    def __init__(self, settings: Settings):
        self.root = Path(settings.media_dir)
        self.base_url = settings.media_base_url

    def save(self, file: UploadFile | None, kind: str) -> str | None:
        if file is None or not file.filename:
            return None

        save_dir = self.root / kind
        os.makedirs(save_dir, exist_ok=True)
        name = f"{uuid.uuid4().hex}-{Path(file.filename).name}"
        path = save_dir / name
        with path.open("wb") as buffer:
            shutil.copyfileobj(file.file, buffer)

        logger.debug("Stored %s upload at %s", kind, path)
        return f"{self.base_url}/{kind}/{name}"

    def path_for(self, url: str | None) -> Path | None:
        if not url or not url.startswith(self.base_url + "/"):
            return None
        return self.root / url[len(self.base_url) + 1:]

    def remove(self, url: str | None):
        path = self.path_for(url)
        if path is not None and path.exists():
            path.unlink()
