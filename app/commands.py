import click
from flask import current_app
from flask.cli import with_appcontext

from app.repositories.user_repo import UserRepo


@click.command("promote-admin")
@click.argument("email")
@with_appcontext
def promote_admin(email):
    """Give the user with EMAIL the admin role (bootstraps the first admin)."""
    user = UserRepo.get_by_email(email.strip().lower())
    if not user:
        raise click.ClickException(f"User with email {email} not found")

    user.role = "admin"
    UserRepo.commit()
    current_app.logger.info(f"[cli] user={user.id} promoted to admin")
    click.echo(f"Promoted {user.email} to admin. Admins: {UserRepo.count_admins()}")


def register_commands(app):
    app.cli.add_command(promote_admin)
