"""
DB SQLite et dossier d'uploads temporaires, fixés avant tout import de src.*
(le moteur SQLAlchemy est créé à l'import de src.database).
"""
import os, sys, tempfile
from pathlib import Path

ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(ROOT))
sys.path.insert(0, str(ROOT / "libs" / "email_builder"))

_TMP = Path(tempfile.mkdtemp(prefix="email_builder_tests_"))
os.environ["DB_PATH"] = str(_TMP / "test.db")
os.environ["UPLOADS_DIR"] = str(_TMP / "uploads")
os.environ["BASE_URL"] = "https://mail.test"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker


@pytest.fixture
def client(tmp_path, monkeypatch):
    """Client de test : DB SQLite propre au test + uploads dans tmp_path."""
    monkeypatch.setenv("UPLOADS_DIR", str(tmp_path / "uploads"))
    from src.api.main import app
    from src.database import get_db, init_db

    engine = create_engine(f"sqlite:///{tmp_path / 'test.db'}", connect_args={"check_same_thread": False})
    init_db(engine)
    TestSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def _test_db():
        db = TestSession()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _test_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
    engine.dispose()
