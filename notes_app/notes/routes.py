from flask import Blueprint, request, jsonify
from notes_app.notes.schemas import NoteOut, collect_violations
from notes_app.notes.store import get_store
from notes_app.common.errors import ApiError, NoteValidationError

bp = Blueprint("notes", __name__)

note_out = NoteOut()
note_out_many = NoteOut(many=True)


def _json_body() -> dict:
    payload = request.get_json(force=True, silent=True)
    if payload is None:
        # Content-Type ignoré; corps vide toléré (PUT sans champ), JSON invalide refusé
        if request.get_data():
            raise ApiError("Request body must be valid JSON.", 400, "bad_request")
        return {}
    if not isinstance(payload, dict):
        raise ApiError("JSON body must be an object.", 400, "bad_request")
    return payload


@bp.get("/", strict_slashes=False)
def list_notes():
    notes = get_store().list_all()
    return jsonify(note_out_many.dump(notes)), 200


@bp.get("/<int:note_id>")
def get_note(note_id):
    note = get_store().get(note_id)
    return jsonify(note_out.dump(note)), 200


@bp.post("/", strict_slashes=False)
def create_note():
    payload = _json_body()
    violations = collect_violations(payload)
    if violations:
        raise NoteValidationError(violations)

    note = get_store().insert(payload["title"], payload["content"])
    return jsonify(note_out.dump(note)), 201


@bp.put("/<int:note_id>")
def update_note(note_id):
    store = get_store()
    note = store.get(note_id)

    payload = _json_body()
    # champs absents (ou null) -> valeur actuelle conservée
    changes = {k: payload[k] for k in ("title", "content") if payload.get(k) is not None}
    merged = {"title": note.title, "content": note.content, **changes}

    violations = collect_violations(merged)
    if violations:
        raise NoteValidationError(violations)

    note = store.update(note_id, **changes)
    return jsonify(note_out.dump(note)), 200


@bp.delete("/<int:note_id>")
def delete_note(note_id):
    get_store().delete(note_id)
    return ("", 204)
