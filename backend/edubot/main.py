"""
FastAPI application entrypoint. Run with: uvicorn edubot.main:app --reload --port 8000 (from backend/)

API base path: routes are mounted at root (no /api/v1 prefix).
  - Mappings: GET/POST/DELETE /admin/textbooks/{id}/passage-sets[/{set_id}], PUT .../order
  - Passage sets: GET /admin/passage-sets/{id}[/textbooks], GET /passage-sets/qr/{qr_code}
  - System prompts: /admin/system-prompts (list, create, update, versions, revert, initialize)

Mapping maintenance (cleanup, legacy repair, QR backfill) runs as scripts: see backend/scripts/.
"""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse

from edubot.config import settings
from edubot.api.textbook_mappings import router as textbook_mappings_router
from edubot.api.system_prompts import router as system_prompts_router
from edubot.layout import render_page

app = FastAPI(
    title="Edutech Chatbot API",
    description="Textbooks, passage sets and their QR mappings; versioned system prompts.",
    version="0.1.0",
)

_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=_origins if _origins else ["http://localhost:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(textbook_mappings_router)
app.include_router(system_prompts_router)


@app.on_event("startup")
def startup():
    """Init SQLite tables and warn about data the maintenance scripts should repair."""
    logging.basicConfig(
        level=getattr(logging, (settings.log_level or "INFO").upper(), logging.INFO),
        format="%(levelname)s %(name)s: %(message)s",
    )
    _log = logging.getLogger("edubot.main")
    from edubot.database import SessionLocal, init_db
    if settings.is_sqlite:
        init_db()
    from edubot.errors import StoreError
    from edubot.services.maintenance import detect_legacy_passage_sets, purge_mappings_without_qr
    db = SessionLocal()
    try:
        pending = purge_mappings_without_qr(db, dry_run=True).matched_ids
        legacy = detect_legacy_passage_sets(db)
        if pending:
            _log.warning("Startup: %s mapping(s) without QR code (run scripts/migrate_existing_mappings.py or cleanup_mappings.py)", len(pending))
        if legacy:
            _log.warning("Startup: %s legacy passage set(s) (run scripts/fix_mapping_issue.py)", len(legacy))
    except StoreError as e:
        _log.warning("Startup: could not inspect mappings (run: alembic upgrade head): %s", e)
    finally:
        db.close()


@app.get("/", response_class=HTMLResponse)
def root():
    """Root: minimal page so the API 'loads' in a browser; links to API docs and frontend."""
    body = """
    <h1>Edutech Chatbot API</h1>
    <p>This is the <strong>API server</strong> (port 8000). It returns JSON, not the web app.</p>
    <ul>
    <li><a href="/docs">OpenAPI docs (Swagger)</a></li>
    <li>Health: <a href="/health">/health</a></li>
    <li>Admin: <a href="/admin">/admin</a></li>
    </ul>
    <p>To use the <strong>web app</strong>, run the frontend and open <a href="http://localhost:3000">http://localhost:3000</a>.</p>
    """
    return render_page("/", "Edutech Chatbot API", body)


@app.get("/admin", response_class=HTMLResponse)
def admin_home():
    body = """
    <h1>Admin</h1>
    <ul>
    <li><a href="/admin/system-prompts">System prompts (JSON)</a></li>
    <li><a href="/docs#/textbook-mappings">Textbook mappings</a></li>
    </ul>
    """
    return render_page("/admin", "Edutech Chatbot Admin", body)


@app.get("/health")
def health():
    """Health check (JSON)."""
    return {"status": "ok", "message": "Edutech Chatbot API"}
