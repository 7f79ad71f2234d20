import click
from notes_app.extensions import db


def register_cli(app):
    @app.cli.command("init-db")
    @click.option("--drop", is_flag=True, help="Supprime les tables avant de les recréer.")
    def init_db(drop):
        """Crée la table `notes` (pas de migrations)."""
        from notes_app.notes import models  # noqa: F401

        if drop:
            db.drop_all()
            click.echo("Dropped tables.")
        db.create_all()
        click.echo("Created tables.")
