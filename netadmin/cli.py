"""NetAdmin CLI tool (netadminctl)."""

from typing import Optional

import typer

app = typer.Typer(name="netadminctl", help="NetAdmin CLI")
db_app = typer.Typer(help="Database management commands")
token_app = typer.Typer(help="Bearer token commands")
app.add_typer(db_app, name="db")
app.add_typer(token_app, name="token")


@db_app.command("create-all")
def db_create_all():
    """Create all tables that don't exist yet."""
    from netadmin.db.base import Base
    from netadmin.db.session import engine
    import netadmin.models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    typer.echo("✅ Tables created (or already exist)")


@db_app.command("seed")
def db_seed():
    """Seed the root account and the settings keys."""
    from netadmin.db.session import SessionLocal
    from netadmin.db.seeds.seed_root import seed_root
    from netadmin.db.seeds.seed_settings import seed_settings

    db = SessionLocal()
    try:
        seed_root(db)
        seed_settings(db)
    finally:
        db.close()
    typer.echo("✅ All seeds applied")


@token_app.command("issue")
def token_issue(
    account_id: int = typer.Argument(..., help="Account ID the token is issued for"),
    lifetime: Optional[str] = typer.Option(None, help="Lifetime such as '12h' or '30m'"),
):
    """Print a bearer token for scripting against the API."""
    from netadmin.core.exceptions import NetAdminError
    from netadmin.core.security import token_service

    try:
        typer.echo(token_service.issue(account_id, lifetime=lifetime))
    except NetAdminError as e:
        typer.echo(f"❌ {e.message}", err=True)
        raise typer.Exit(code=1)


@app.command("serve")
def serve(
    host: str = typer.Option("0.0.0.0", help="Host"),
    port: int = typer.Option(8000, help="Port"),
    reload: bool = typer.Option(False, help="Auto-reload"),
):
    """Start the API server."""
    import uvicorn
    uvicorn.run("netadmin.main:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    app()
