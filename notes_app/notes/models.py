from datetime import datetime, timezone
from sqlalchemy import func
from notes_app.extensions import db


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Note(db.Model):
    __tablename__ = "notes"
    # SQLite: ids jamais réutilisés après suppression
    __table_args__ = {"sqlite_autoincrement": True}

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    title = db.Column(db.String(255), nullable=False)
    content = db.Column(db.Text, nullable=False)

    # posés par le store (même instant à la création)
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False)
    updated_at = db.Column(db.DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False)

    def __repr__(self) -> str:
        return f"<Note {self.id} {self.title!r}>"
