import click

from blog.db import db
from blog.repositories import user_repository


def register_commands(app):
    @app.cli.command("init-db")
    @click.option("--drop", is_flag=True, help="Drop existing tables first.")
    def init_db(drop):
        """Create the users and posts tables."""
        if drop:
            db.drop_all()
        db.create_all()
        click.echo("Database initialised.")

    @app.cli.command("grant-admin")
    @click.argument("email")
    @click.option("--revoke", is_flag=True, help="Remove the admin flag instead.")
    def grant_admin(email, revoke):
        """Flag an existing user as admin (or revoke it)."""
        user = user_repository.get_by_email(email.strip().lower())
        if not user:
            raise click.ClickException(f"No user with email {email}")

        user_repository.set_admin(user, not revoke)
        state = "revoked from" if revoke else "granted to"
        click.echo(f"Admin {state} {user.email}")
