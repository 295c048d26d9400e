import click
from flask.cli import with_appcontext

from libris.errors import ServiceError
from libris.repositories.gateway import current_gateway
from libris.services.auth_service import AuthService


@click.command("create-admin")
@click.option("--name", required=True)
@click.option("--email", required=True)
@click.password_option()
@with_appcontext
def create_admin_command(name, email, password):
    """Register an administrator account."""
    try:
        user = AuthService(current_gateway()).register(name, email, password, is_admin=True)
    except ServiceError as e:
        raise click.ClickException(e.message)
    click.echo(f"Created admin {user.email} ({user.id})")


def register_commands(app):
    app.cli.add_command(create_admin_command)
