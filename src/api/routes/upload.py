"""
Upload des images d'emails
Routes :
  POST /api/email/assets             → fichier brut → {url}
  POST /api/email/assets/signature   → recadrage (zoom / rotation / décalage / forme) → {url}

Erreurs : bucket absent 503, fichier trop lourd 413, image illisible 400, autre échec 502.
"""
import logging

from fastapi import APIRouter, File, Form, HTTPException, UploadFile

from email_builder.errors import EmailBuilderError
from email_builder.imaging import crop_image, output_content_type

from ...assets import LocalAssetStore
from ..errors import http_error

log = logging.getLogger(__name__)

router = APIRouter(tags=["Email assets"])


def _read(file: UploadFile) -> bytes:
    data = file.file.read()
    if not data:
        raise HTTPException(400, "Fichier vide")
    return data


@router.post("/api/email/assets")
def upload_asset(file: UploadFile = File(...)):
    data = _read(file)
    try:
        url = LocalAssetStore().upload(data, file.content_type or "")
    except EmailBuilderError as e:
        log.warning("Upload %s refusé : %s", file.filename, e.message)
        raise http_error(e)
    return {"url": url}


@router.post("/api/email/assets/signature")
def upload_signature(
    file: UploadFile = File(...),
    zoom: float = Form(1.0, ge=0.5, le=3.0),
    rotation: int = Form(0),
    offset_x: float = Form(0),
    offset_y: float = Form(0),
    shape: str = Form("circle"),
    output_size: int = Form(400, ge=16, le=2000),
):
    data = _read(file)
    try:
        cropped = crop_image(data, zoom=zoom, rotation=rotation, offset=(offset_x, offset_y),
                             shape=shape, output_size=output_size)
        url = LocalAssetStore().upload(cropped, output_content_type(shape))
    except EmailBuilderError as e:
        log.warning("Upload signature %s refusé : %s", file.filename, e.message)
        raise http_error(e)
    return {"url": url}
