# storefront/services/storage.py
import os
import shutil
import time
from typing import BinaryIO

from storefront.utils.settings import UPLOAD_DIR
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

PUBLIC_PREFIX = "/uploads/"


class DiskStorage:
    """Stores uploaded files under one directory, named <epoch-ms>-<original name>."""

    def __init__(self, root: str | None = None):
        self.root = root or UPLOAD_DIR

    def save(self, filename: str, stream: BinaryIO) -> str:
        os.makedirs(self.root, exist_ok=True)

        #strip any client supplied path components
        safe_name = os.path.basename(filename or "").replace(" ", "-") or "upload"
        stored = f"{int(time.time() * 1000)}-{safe_name}"

        with open(os.path.join(self.root, stored), "wb") as out:
            shutil.copyfileobj(stream, out)

        logger.info(f"Stored upload {stored}")
        return PUBLIC_PREFIX + stored

    def delete(self, public_path: str | None) -> None:
        if not public_path or not public_path.startswith(PUBLIC_PREFIX):
            return
        path = os.path.join(self.root, os.path.basename(public_path))
        try:
            os.remove(path)
        except FileNotFoundError:
            logger.warning(f"Upload {path} already gone")
