"""
Recadrage de la photo de signature (Pillow).

Contrat boîte noire : octets source + zoom / rotation / décalage / forme → octets
recadrés d'un carré `output_size`.
  - l'image (après rotation) couvre le carré à zoom=1, centrée
  - zoom ∈ [0.5, 3], rotation ramenée au multiple de 90° le plus proche
  - offset en pixels de sortie (x vers la droite, y vers le bas)
  - circle → PNG, coins transparents ; square → JPEG qualité 90, fond blanc
"""
import io
import logging
from typing import Tuple

from PIL import Image, ImageDraw, ImageOps, UnidentifiedImageError

from .errors import InvalidImage

log = logging.getLogger(__name__)

MIN_ZOOM = 0.5
MAX_ZOOM = 3.0
JPEG_QUALITY = 90


def _open(data: bytes) -> Image.Image:
    if not data:
        raise InvalidImage("Fichier image vide")
    try:
        img = Image.open(io.BytesIO(data))
        img.load()
    except (UnidentifiedImageError, OSError) as e:
        raise InvalidImage(f"Image illisible : {e}") from e
    return ImageOps.exif_transpose(img).convert("RGBA")


def crop_image(
    data: bytes,
    zoom: float = 1.0,
    rotation: int = 0,
    offset: Tuple[float, float] = (0, 0),
    shape: str = "circle",
    output_size: int = 400,
) -> bytes:
    img = _open(data)
    zoom = min(max(float(zoom), MIN_ZOOM), MAX_ZOOM)
    angle = (int(round(rotation / 90.0)) * 90) % 360
    size = max(int(output_size), 1)

    if angle:
        # PIL tourne dans le sens anti-horaire
        img = img.rotate(-angle, expand=True)

    w, h = img.size
    scale = size / min(w, h) * zoom
    scaled = img.resize((max(round(w * scale), 1), max(round(h * scale), 1)), Image.LANCZOS)

    dx, dy = offset
    left = round((size - scaled.width) / 2 + dx)
    top = round((size - scaled.height) / 2 + dy)

    canvas = Image.new("RGBA", (size, size), (255, 255, 255, 0))
    canvas.paste(scaled, (left, top), scaled)

    out = io.BytesIO()
    if shape == "circle":
        mask = Image.new("L", (size, size), 0)
        ImageDraw.Draw(mask).ellipse((0, 0, size - 1, size - 1), fill=255)
        result = Image.new("RGBA", (size, size), (0, 0, 0, 0))
        result.paste(canvas, (0, 0), mask)
        result.save(out, "PNG")
    else:
        background = Image.new("RGB", (size, size), (255, 255, 255))
        background.paste(canvas, (0, 0), canvas)
        background.save(out, "JPEG", quality=JPEG_QUALITY)

    log.debug("Recadrage %s %dpx (zoom=%.2f, rotation=%d)", shape, size, zoom, angle)
    return out.getvalue()


def output_content_type(shape: str) -> str:
    return "image/png" if shape == "circle" else "image/jpeg"
