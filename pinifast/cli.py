"""pinifast CLI — serve the API and manage the admin bootstrap."""

from typing import Optional

import typer

app = typer.Typer(name="pinifast", help="pinifast backend CLI")


@app.command("serve")
def serve(
    host: Optional[str] = typer.Option(None, help="Bind address (defaults to HOST)"),
    port: Optional[int] = typer.Option(None, help="Port (defaults to PORT)"),
    reload: bool = typer.Option(False, help="Auto-reload"),
):
    """Start the API server."""
    import uvicorn

    from pinifast.config import get_settings

    settings = get_settings()
    uvicorn.run(
        "pinifast.main:app",
        host=host or settings.HOST,
        port=port or settings.PORT,
        reload=reload,
    )


@app.command("bootstrap")
def bootstrap():
    """Create tables, default roles and (if enabled) the admin user."""
    from pinifast.core.logging import configure_logging
    from pinifast.main import run_bootstrap

    configure_logging()
    run_bootstrap()
    typer.echo("Bootstrap completed")


@app.command("check-admin")
def check_admin():
    """Exit non-zero when no user holds the admin role."""
    from pinifast.infrastructure.database import SessionLocal, init_db
    from pinifast.interfaces.deps import get_bootstrap_service

    init_db()
    db = SessionLocal()
    try:
        exists = get_bootstrap_service(db).check_admin_exists()
    finally:
        db.close()

    if not exists:
        typer.echo("No admin user found")
        raise typer.Exit(code=1)
    typer.echo("Admin user exists")


@app.command("create-admin")
def create_admin(
    email: str = typer.Argument(..., help="Email for the emergency admin"),
    password: str = typer.Option(..., prompt=True, hide_input=True, confirmation_prompt=True),
):
    """Create an emergency admin account."""
    from pydantic import ValidationError

    from pinifast.core.exceptions import AppError
    from pinifast.core.logging import configure_logging
    from pinifast.infrastructure.database import SessionLocal, init_db
    from pinifast.interfaces.deps import get_bootstrap_service

    configure_logging()
    init_db()
    db = SessionLocal()
    try:
        service = get_bootstrap_service(db)
        service.initialize_roles()
        admin = service.create_emergency_admin(email, password)
    except AppError as exc:
        typer.echo(f"Failed to create admin: {exc.message}", err=True)
        raise typer.Exit(code=1)
    except ValidationError as exc:
        typer.echo(f"Invalid admin details: {exc.errors()[0]['msg']}", err=True)
        raise typer.Exit(code=1)
    finally:
        db.close()

    typer.echo(f"Emergency admin created: {admin.email}")


if __name__ == "__main__":
    app()
