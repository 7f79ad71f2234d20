import itertools
import logging
import threading
from flask import current_app
from notes_app.extensions import db
from notes_app.common.errors import NotFoundError
from notes_app.common.logging import current_request_id
from notes_app.notes.models import Note, utcnow

logger = logging.getLogger(__name__)


def _log(event: str, note_id: int) -> None:
    logger.info(event, extra={"note_id": note_id, "request_id": current_request_id()})


class SqlNoteStore:
    """Accès direct à la table `notes` via la session Flask-SQLAlchemy.

    Chaque opération fait un seul commit: l'atomicité par ligne est celle de la base.
    """

    def list_all(self) -> list[Note]:
        return Note.query.order_by(Note.id.asc()).all()

    def get(self, note_id: int) -> Note:
        note = db.session.get(Note, note_id)
        if not note:
            raise NotFoundError("Note not found.", {"note_id": note_id})
        return note

    def insert(self, title: str, content: str) -> Note:
        now = utcnow()
        note = Note(title=title, content=content, created_at=now, updated_at=now)
        db.session.add(note)
        db.session.commit()
        _log("note_created", note.id)
        return note

    def update(self, note_id: int, title: str | None = None, content: str | None = None) -> Note:
        note = self.get(note_id)
        if title is not None:
            note.title = title
        if content is not None:
            note.content = content
        # rafraîchi même si aucun champ ne change
        note.updated_at = utcnow()
        db.session.commit()
        _log("note_updated", note.id)
        return note

    def delete(self, note_id: int) -> None:
        note = self.get(note_id)
        db.session.delete(note)
        db.session.commit()
        _log("note_deleted", note_id)


class InMemoryNoteStore:
    """Même contrat que SqlNoteStore, sur un dict id -> Note (tests, démo sans base).

    Partagé entre les threads du serveur: toutes les opérations passent par un verrou,
    et une mise à jour remplace la note au lieu de la modifier sur place.
    """

    def __init__(self):
        self._notes: dict[int, Note] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def list_all(self) -> list[Note]:
        # les ids croissent: ordre d'insertion
        with self._lock:
            return [note for _, note in sorted(self._notes.items())]

    def _get(self, note_id: int) -> Note:
        note = self._notes.get(note_id)
        if note is None:
            raise NotFoundError("Note not found.", {"note_id": note_id})
        return note

    def get(self, note_id: int) -> Note:
        with self._lock:
            return self._get(note_id)

    def insert(self, title: str, content: str) -> Note:
        now = utcnow()
        with self._lock:
            note = Note(id=next(self._ids), title=title, content=content, created_at=now, updated_at=now)
            self._notes[note.id] = note
        _log("note_created", note.id)
        return note

    def update(self, note_id: int, title: str | None = None, content: str | None = None) -> Note:
        with self._lock:
            current = self._get(note_id)
            note = Note(
                id=current.id,
                title=current.title if title is None else title,
                content=current.content if content is None else content,
                created_at=current.created_at,
                updated_at=utcnow(),
            )
            self._notes[note_id] = note
        _log("note_updated", note.id)
        return note

    def delete(self, note_id: int) -> None:
        with self._lock:
            self._get(note_id)
            del self._notes[note_id]
        _log("note_deleted", note_id)


def build_store(kind: str):
    if kind == "sql":
        return SqlNoteStore()
    if kind == "memory":
        return InMemoryNoteStore()
    raise ValueError(f"Unknown NOTE_STORE: {kind!r}")


def get_store():
    return current_app.extensions["note_store"]
