# notes_app/ui/routes.py
from urllib.parse import urlsplit
from flask import Blueprint, current_app, render_template

bp = Blueprint("ui", __name__)


def api_origin() -> str:
    """Origine (scheme://host) de NOTES_API_BASE_URL, "" si même origine."""
    parts = urlsplit(current_app.config.get("NOTES_API_BASE_URL") or "")
    if not parts.scheme or not parts.netloc:
        return ""
    return f"{parts.scheme}://{parts.netloc}"


@bp.get("/")
def index():
    base_url = (current_app.config.get("NOTES_API_BASE_URL") or "").rstrip("/")
    return render_template("ui/index.html", api_base_url=base_url)
