"""
Module ASSETS — stockage local des images d'emails.
Implémente le contrat AssetStore : upload(data, content_type) → URL.

Fichiers écrits dans UPLOADS_DIR/<bucket>/ et servis sous /dist/uploads.
L'URL retournée est un chemin "/dist/uploads/..." : le compilateur la rend
absolue avec BASE_URL au moment de la compilation.
"""
import logging
import os
import uuid
from pathlib import Path
from typing import Optional

from email_builder.errors import AssetUploadError, BucketMissing, SizeExceeded

log = logging.getLogger(__name__)

_DEFAULT_UPLOADS = str(Path(__file__).parent.parent / "dist" / "uploads")

_EXTENSIONS = {
    "image/png": ".png",
    "image/jpeg": ".jpg",
    "image/jpg": ".jpg",
    "image/gif": ".gif",
    "image/webp": ".webp",
    "image/svg+xml": ".svg",
}


def uploads_dir() -> Path:
    return Path(os.getenv("UPLOADS_DIR", _DEFAULT_UPLOADS))


def asset_bucket() -> str:
    return os.getenv("ASSET_BUCKET", "email-assets")


def max_upload_bytes() -> int:
    return int(float(os.getenv("MAX_UPLOAD_MB", "5")) * 1_048_576)


class LocalAssetStore:

    def __init__(self, root: Optional[Path] = None, bucket: Optional[str] = None, max_bytes: Optional[int] = None):
        self.root = Path(root) if root else uploads_dir()
        self.bucket = bucket or asset_bucket()
        self.max_bytes = max_bytes if max_bytes is not None else max_upload_bytes()

    @property
    def bucket_dir(self) -> Path:
        return self.root / self.bucket

    def upload(self, data: bytes, content_type: str) -> str:
        if not self.bucket_dir.is_dir():
            raise BucketMissing(self.bucket)
        if len(data) > self.max_bytes:
            raise SizeExceeded(len(data), self.max_bytes)
        ext = _EXTENSIONS.get((content_type or "").split(";")[0].strip().lower())
        if not ext:
            raise AssetUploadError(f"Type de fichier non supporté : {content_type or 'inconnu'}")

        name = f"{uuid.uuid4().hex}{ext}"
        try:
            (self.bucket_dir / name).write_bytes(data)
        except OSError as e:
            log.error("Écriture asset %s impossible : %s", name, e)
            raise AssetUploadError() from e
        log.info("Asset uploadé : %s/%s (%d octets)", self.bucket, name, len(data))
        return f"/dist/uploads/{self.bucket}/{name}"
