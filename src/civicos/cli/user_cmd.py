"""Account administration commands: create accounts with grants and list them."""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any

import typer
from sqlalchemy.ext.asyncio import AsyncSession

user_app = typer.Typer()


async def _with_session(work: Callable[[AsyncSession], Awaitable[Any]]) -> Any:
    from civicos.core.config import get_settings
    from civicos.core.database import dispose_engine, get_session_factory, init_engine

    init_engine(get_settings().database_url)
    try:
        async with get_session_factory()() as session:
            return await work(session)
    finally:
        await dispose_engine()


@user_app.command("create")
def create_user(
    username: str = typer.Option(..., prompt=True, help="Username"),
    email: str = typer.Option(..., prompt=True, help="Email address"),
    password: str = typer.Option(..., prompt=True, hide_input=True, confirmation_prompt=True, help="Password"),
    role: str = typer.Option("citizen", prompt=True, help="Account role (citizen/moderator/admin)"),
    permission: list[str] = typer.Option(
        [],
        "--permission",
        "-p",
        help="Grant a permission (repeatable), e.g. admin.data.manage",
    ),
    if_not_exists: bool = typer.Option(
        False,
        "--if-not-exists",
        help="Exit successfully if the account already exists",
    ),
) -> None:
    """Create an account, typically a moderator holding admin.data.manage."""
    asyncio.run(_create_user(username, email, password, role, permission, if_not_exists=if_not_exists))


async def _create_user(
    username: str,
    email: str,
    password: str,
    role: str,
    permissions: list[str],
    *,
    if_not_exists: bool = False,
) -> None:
    from pydantic import ValidationError

    from civicos.schemas.auth import UserCreateRequest
    from civicos.services.auth_service import create_user

    # Validate before touching the database so a typo in a grant costs nothing.
    try:
        request = UserCreateRequest(
            username=username, email=email, password=password, role=role, permissions=permissions
        )
    except ValidationError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1) from e

    try:
        user = await _with_session(lambda session: create_user(session, request))
    except ValueError as e:
        if if_not_exists and "already exists" in str(e):
            typer.echo(f"Account '{username}' already exists, nothing to do")
            return
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1) from e

    grants = ", ".join(user.permissions) or "none"
    typer.echo(f"Created {user.role} '{user.username}' (permissions: {grants})")


@user_app.command("list")
def list_users(
    page: int = typer.Option(1, "--page", min=1, help="Page number"),
    page_size: int = typer.Option(50, "--page-size", min=1, max=500, help="Accounts per page"),
) -> None:
    """List accounts with their roles and permission grants."""
    from civicos.services.auth_service import list_users as fetch_users

    users, total = asyncio.run(_with_session(lambda session: fetch_users(session, page, page_size)))
    typer.echo(f"{'Username':<20} {'Role':<10} {'Active':<7} Permissions")
    for user in users:
        grants = ",".join(user.permissions) or "-"
        typer.echo(f"{user.username:<20} {user.role:<10} {'yes' if user.is_active else 'no':<7} {grants}")
    typer.echo(f"{len(users)} of {total} accounts")
