import os
from flask import Flask, jsonify, request
from dotenv import load_dotenv
from sqlalchemy import text

from .config import DevConfig, ProdConfig, TestConfig
from .extensions import db, cors
from .cli import register_cli
from .common.errors import register_error_handlers
from .common.logging import setup_json_logging, register_request_logging


def create_app():
    # Charge .env si présent (dev)
    load_dotenv()

    app = Flask(__name__)

    # Choix config selon env
    env = os.getenv("APP_ENV") or os.getenv("FLASK_ENV", "development")
    if env in ("test", "testing"):
        app.config.from_object(TestConfig)
    elif env == "production":
        app.config.from_object(ProdConfig)
    else:
        app.config.from_object(DevConfig)

    # Init extensions
    db.init_app(app)

    setup_json_logging(app)
    register_request_logging(app)

    # --- Helpers ---
    def _csv(value, default_if_empty):
        """Convertit une chaîne CSV en liste, sinon retourne la valeur telle quelle ou un défaut."""
        if value is None:
            return default_if_empty
        if isinstance(value, str) and "," in value:
            items = [x.strip() for x in value.split(",") if x.strip()]
            return items if items else default_if_empty
        return value

    # --- CORS: l'UI peut être servie depuis une autre origine ---
    origins = _csv(app.config.get("CORS_ORIGINS", "*"), "*")
    allow_headers = _csv(app.config.get("CORS_ALLOW_HEADERS"), ["Content-Type"])
    expose_headers = _csv(app.config.get("CORS_EXPOSE_HEADERS"), ["Content-Type"])

    cors.init_app(app, resources={
        r"/api/*": {
            "origins": origins,
            "allow_headers": allow_headers,
            "expose_headers": expose_headers,
            "supports_credentials": False,
        }
    })

    # Importer les modèles pour que create_all voie la table
    from .notes import models as notes_models  # noqa: F401

    # Store des notes (SQL ou mémoire)
    from .notes.store import build_store
    app.extensions["note_store"] = build_store(app.config["NOTE_STORE"])
    if app.config["NOTE_STORE"] == "sql" and app.config.get("AUTO_CREATE_TABLES"):
        with app.app_context():
            db.create_all()

    # Handlers d'erreurs JSON uniformes
    register_error_handlers(app)
    register_cli(app)

    from .ui.routes import api_origin

    # --- Security headers (UN SEUL after_request) ---
    @app.after_request
    def set_security_headers(resp):
        path = request.path or ""

        if path == "/" or path.startswith("/static/"):
            # UI: assets locaux + appels vers l'API configurée
            connect_src = " ".join(filter(None, ["'self'", api_origin()]))
            resp.headers["Content-Security-Policy"] = (
                "default-src 'self'; "
                f"connect-src {connect_src}; "
                "img-src 'self' data:; "
                "style-src 'self'; "
                "script-src 'self'"
            )
            resp.headers["X-Frame-Options"] = "SAMEORIGIN"
        else:
            # API JSON: CSP très restrictif (pas d'HTML attendu)
            resp.headers["Content-Security-Policy"] = "default-src 'none'; frame-ancestors 'none'; base-uri 'none'"
            resp.headers["X-Frame-Options"] = "DENY"

        # Headers communs
        resp.headers["X-Content-Type-Options"] = "nosniff"
        resp.headers["Referrer-Policy"] = "no-referrer"

        # HSTS uniquement si HTTPS (prod / reverse-proxy)
        if (env == "production" or app.config.get("ENFORCE_HTTPS")) and (
            request.is_secure or request.headers.get("X-Forwarded-Proto", "") == "https"
        ):
            resp.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains; preload"

        return resp

    # --- Blueprints ---
    from .notes.routes import bp as notes_bp
    app.register_blueprint(notes_bp, url_prefix="/api/notes")

    from .ui.routes import bp as ui_bp
    app.register_blueprint(ui_bp)

    def _db_status() -> str:
        if app.config["NOTE_STORE"] != "sql":
            return "n/a"
        try:
            with db.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except Exception:
            return "down"
        return "up"

    # Liveness probe (ping DB simple)
    @app.get("/healthz")
    def healthz():
        return jsonify({
            "status": "ok",
            "env": env,
            "db": _db_status(),
        })

    # Readiness probe: le store doit répondre
    @app.get("/readyz")
    def readyz():
        db_status = _db_status()
        ok = db_status != "down"
        return jsonify({"status": "ok" if ok else "error", "db": db_status}), (200 if ok else 503)

    return app
