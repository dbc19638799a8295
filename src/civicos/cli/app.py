"""The ``civicos`` command.

``civicos serve`` runs the API.  The ``db``, ``user`` and ``ingest``
groups cover migrations, account grants and on-demand ingestion, so a
fresh deployment is ``db upgrade``, ``user create`` with
``admin.data.manage``, then ``ingest all``.  Logging is configured from
the environment before any command runs.
"""

import typer

from civicos.core.config import get_settings
from civicos.core.logging import setup_logging

app = typer.Typer(name="civicos", help="CivicOS: Canadian civic data ingestion and API")


@app.callback()
def _main_callback() -> None:
    settings = get_settings()
    setup_logging(settings.log_level, log_dir=settings.log_dir)


@app.command()
def serve(
    host: str = typer.Option("0.0.0.0", "--host", help="Bind host"),  # noqa: S104
    port: int = typer.Option(8000, "--port", help="Bind port"),
    workers: int = typer.Option(
        1,
        "--workers",
        min=1,
        help="Worker processes; rate limits and the refresh loop run per worker",
    ),
    reload: bool = typer.Option(False, "--reload", help="Restart on code changes (single worker only)"),
) -> None:
    """Serve the CivicOS API with uvicorn."""
    import uvicorn

    if reload and workers > 1:
        typer.echo("Error: --reload cannot be combined with --workers", err=True)
        raise typer.Exit(code=1)

    uvicorn.run("civicos.main:create_app", factory=True, host=host, port=port, reload=reload, workers=workers)


def _register_subcommands() -> None:
    from civicos.cli.db_cmd import db_app
    from civicos.cli.ingest_cmd import ingest_app
    from civicos.cli.user_cmd import user_app

    app.add_typer(db_app, name="db", help="Apply, roll back and check database migrations")
    app.add_typer(user_app, name="user", help="Create accounts with permission grants and list them")
    app.add_typer(ingest_app, name="ingest", help="Run ingestion without the API (elections, politicians, legal)")


_register_subcommands()
