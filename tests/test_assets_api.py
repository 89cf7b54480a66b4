"""
Tests upload d'assets — LocalAssetStore + routes /api/email/assets.
"""
import io
from pathlib import Path

import pytest
from PIL import Image

from email_builder.errors import AssetUploadError, BucketMissing, SizeExceeded
from src.assets import LocalAssetStore


def _png(size=(64, 48)) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", size, (10, 120, 200)).save(buf, "PNG")
    return buf.getvalue()


# ── LocalAssetStore ───────────────────────────────────────────────────────

class TestLocalAssetStore:
    def test_upload_writes_file_and_returns_path(self, tmp_path):
        (tmp_path / "email-assets").mkdir()
        store = LocalAssetStore(root=tmp_path, bucket="email-assets", max_bytes=1000)
        url = store.upload(b"abc", "image/png")
        assert url.startswith("/dist/uploads/email-assets/")
        assert url.endswith(".png")
        assert (tmp_path / "email-assets" / Path(url).name).read_bytes() == b"abc"

    def test_missing_bucket(self, tmp_path):
        store = LocalAssetStore(root=tmp_path, bucket="absent")
        with pytest.raises(BucketMissing) as exc:
            store.upload(b"abc", "image/png")
        assert "absent" in exc.value.message

    def test_size_exceeded(self, tmp_path):
        (tmp_path / "b").mkdir()
        store = LocalAssetStore(root=tmp_path, bucket="b", max_bytes=2)
        with pytest.raises(SizeExceeded):
            store.upload(b"abc", "image/png")
        assert list((tmp_path / "b").iterdir()) == []

    def test_unsupported_type(self, tmp_path):
        (tmp_path / "b").mkdir()
        store = LocalAssetStore(root=tmp_path, bucket="b")
        with pytest.raises(AssetUploadError):
            store.upload(b"abc", "application/pdf")

    def test_limit_from_env(self, tmp_path, monkeypatch):
        monkeypatch.setenv("MAX_UPLOAD_MB", "1")
        assert LocalAssetStore(root=tmp_path).max_bytes == 1_048_576


# ── Routes ────────────────────────────────────────────────────────────────

class TestUploadRoutes:
    def test_upload_asset(self, client, tmp_path):
        r = client.post("/api/email/assets", files={"file": ("logo.png", _png(), "image/png")})
        assert r.status_code == 200, r.text
        name = Path(r.json()["url"]).name
        assert (tmp_path / "uploads" / "email-assets" / name).exists()

    def test_upload_too_large_413(self, client, monkeypatch):
        monkeypatch.setenv("MAX_UPLOAD_MB", "0.00001")
        r = client.post("/api/email/assets", files={"file": ("logo.png", _png(), "image/png")})
        assert r.status_code == 413
        assert "volumineux" in r.json()["detail"]

    def test_upload_missing_bucket_503(self, client, monkeypatch):
        monkeypatch.setenv("ASSET_BUCKET", "jamais-cree")
        r = client.post("/api/email/assets", files={"file": ("logo.png", _png(), "image/png")})
        assert r.status_code == 503
        assert "jamais-cree" in r.json()["detail"]

    def test_upload_unsupported_type_502(self, client):
        r = client.post("/api/email/assets", files={"file": ("doc.pdf", b"%PDF", "application/pdf")})
        assert r.status_code == 502

    def test_upload_empty_file_400(self, client):
        r = client.post("/api/email/assets", files={"file": ("vide.png", b"", "image/png")})
        assert r.status_code == 400

    def test_signature_crop_circle_png(self, client, tmp_path):
        r = client.post(
            "/api/email/assets/signature",
            files={"file": ("me.png", _png((300, 200)), "image/png")},
            data={"zoom": "1.5", "rotation": "90", "shape": "circle", "output_size": "128"},
        )
        assert r.status_code == 200, r.text
        url = r.json()["url"]
        assert url.endswith(".png")
        img = Image.open(tmp_path / "uploads" / "email-assets" / Path(url).name)
        assert img.size == (128, 128)

    def test_signature_square_jpeg(self, client):
        r = client.post(
            "/api/email/assets/signature",
            files={"file": ("me.png", _png(), "image/png")},
            data={"shape": "square"},
        )
        assert r.json()["url"].endswith(".jpg")

    def test_signature_invalid_image_400(self, client):
        r = client.post(
            "/api/email/assets/signature",
            files={"file": ("me.png", b"pas une image", "image/png")},
        )
        assert r.status_code == 400


def test_health(client):
    assert client.get("/health").json()["status"] == "ok"
