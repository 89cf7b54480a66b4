"""
EMAIL BUILDER — FastAPI app
Démarrer : uvicorn src.api.main:app --reload --port 8001
"""
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s — %(message)s")
log = logging.getLogger(__name__)

app = FastAPI(title="EMAIL BUILDER — Templates email en blocs", version="0.1.0", docs_url="/docs")

app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])


@app.on_event("startup")
def startup():
    from ..database import init_db
    init_db()
    log.info("DB initialisée (SQLite)")

    # Montage des uploads (bucket créé si absent, silencieux si permission refusée)
    from ..assets import asset_bucket, uploads_dir
    root = uploads_dir()
    try:
        (root / asset_bucket()).mkdir(parents=True, exist_ok=True)
        app.mount("/dist/uploads", StaticFiles(directory=str(root)), name="uploads")
        log.info("Static uploads monté sur %s", root)
    except OSError as e:
        log.warning("Impossible de monter /dist/uploads : %s", e)


@app.get("/health")
def health():
    return {"status": "ok", "service": "email_builder", "version": "0.1.0"}


# ── Routes ──
from .routes import templates, themes, upload

app.include_router(templates.router)
app.include_router(themes.router)
app.include_router(upload.router)
