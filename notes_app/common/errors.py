import logging
from flask import jsonify
from werkzeug.exceptions import HTTPException


class ApiError(Exception):
    def __init__(self, message, status_code=400, code="bad_request", details=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code
        self.details = details or {}


class NotFoundError(ApiError):
    """Ressource absente: 404 sans corps."""

    def __init__(self, message="Not found.", details=None):
        super().__init__(message, 404, "not_found", details)


class NoteValidationError(ApiError):
    """Violations de validation: 400 avec la liste des messages."""

    def __init__(self, messages: list[str]):
        super().__init__("Validation failed.", 400, "validation_error", {"errors": messages})
        self.messages = list(messages)


def _json_error(message, status, code, details=None):
    return jsonify({
        "error": {"code": code, "message": message, "details": details or {}}
    }), status


def register_error_handlers(app):
    @app.errorhandler(NotFoundError)
    def handle_not_found(e: NotFoundError):
        return ("", 404)

    @app.errorhandler(NoteValidationError)
    def handle_note_validation(e: NoteValidationError):
        return jsonify({"errors": e.messages}), 400

    @app.errorhandler(ApiError)
    def handle_api_error(e: ApiError):
        return _json_error(e.message, e.status_code, e.code, e.details)

    @app.errorhandler(HTTPException)
    def handle_http_exception(e: HTTPException):
        # Ex: 404, 405, 413…
        return _json_error(e.description or "HTTP error", e.code or 500, "http_error")

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        # traceback en logs; masqué côté client
        logging.getLogger("notes_app.error").exception("unexpected_error")
        return _json_error("Internal server error.", 500, "internal_error")
