"""Sign-in check command."""

import click

from ..client import ApiError
from .base import async_command, echo_error, echo_info, echo_success, ensure_initialized, open_client


@click.command()
@click.option("--email", help="Email to record on the profile")
@click.option("--first-name", help="Given name")
@click.option("--last-name", help="Family name")
@click.pass_context
@async_command
async def login(ctx, email: str | None, first_name: str | None, last_name: str | None):
    """Sign in and show the stored profile.

    Sends the configured identity headers the way an identity-aware proxy
    would, which also creates or refreshes the user record.
    """
    ensure_initialized(ctx)
    async with open_client(
        ctx, email=email, first_name=first_name, last_name=last_name
    ) as client:
        try:
            user = await client.current_user()
        except ApiError as e:
            echo_error(f"Could not load profile: {e.message}")
            ctx.exit(1)

    echo_success(f"Signed in as {user.display_name}")
    echo_info(f"User ID: {user.id}")
    if user.email:
        echo_info(f"Email:   {user.email}")
