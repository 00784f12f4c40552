"""
Restaurant Orders CLI.

Command-line interface for schema setup, demo data and local serving.
"""

import asyncio

import typer
from rich.console import Console
from rich.table import Table

app = typer.Typer(
    name="restaurant-orders",
    help="Restaurant Orders backend CLI",
    add_completion=False,
)
console = Console()


# =============================================================================
# Database Commands
# =============================================================================

@app.command()
def init_db(
    drop: bool = typer.Option(False, "--drop", help="Drop existing tables first"),
):
    """Create database tables."""

    async def _init():
        from rest_api.models import Base
        from shared.infrastructure.db import engine

        async with engine.begin() as conn:
            if drop:
                await conn.run_sync(Base.metadata.drop_all)
            await conn.run_sync(Base.metadata.create_all)
        await engine.dispose()

    console.print("[blue]Creating tables...[/blue]")
    try:
        asyncio.run(_init())
    except Exception as e:
        console.print(f"[red]✗ Schema creation failed: {e}[/red]")
        raise typer.Exit(1)
    console.print("[green]✓ Tables created[/green]")


@app.command()
def seed(
    force: bool = typer.Option(False, "--force", "-f", help="Allow seeding production"),
):
    """Seed database with a demo restaurant, menu and staff."""
    from shared.config.settings import settings

    if settings.environment == "production" and not force:
        console.print("[red]Cannot seed production without --force[/red]")
        raise typer.Exit(1)

    async def _seed():
        from rest_api.models import User
        from rest_api.seed import seed as seed_db
        from shared.infrastructure.db import get_db_context, engine
        from sqlalchemy import select

        async with get_db_context() as db:
            created = await seed_db(db)
            users = (await db.scalars(select(User).order_by(User.id))).all()
        await engine.dispose()
        return created, users

    try:
        created, users = asyncio.run(_seed())
    except Exception as e:
        console.print(f"[red]✗ Seeding failed: {e}[/red]")
        raise typer.Exit(1)

    if not created:
        console.print("[yellow]Already seeded[/yellow]")

    table = Table(title="Users")
    table.add_column("ID", style="cyan")
    table.add_column("Email")
    table.add_column("Role", style="green")
    for user in users:
        table.add_row(str(user.id), user.email, user.role)
    console.print(table)


# =============================================================================
# Auth Commands
# =============================================================================

@app.command()
def token(
    user_id: int = typer.Argument(..., help="User id placed in the 'sub' claim"),
    role: str = typer.Option(..., "--role", "-r", help="Role claim"),
    ttl: int = typer.Option(3600, help="Lifetime in seconds"),
):
    """Issue a bearer token for local testing."""
    from shared.config.constants import Roles
    from shared.security.auth import sign_jwt

    if role not in Roles.ALL:
        console.print(f"[red]Unknown role {role}. Expected one of {sorted(Roles.ALL)}[/red]")
        raise typer.Exit(1)

    console.print(sign_jwt({"sub": str(user_id), "roles": [role]}, ttl_seconds=ttl))


# =============================================================================
# Server Commands
# =============================================================================

@app.command()
def serve(
    host: str = typer.Option("0.0.0.0", help="Bind address"),
    port: int = typer.Option(None, help="Port (defaults to REST_API_PORT)"),
    reload: bool = typer.Option(False, "--reload", help="Auto-reload on code changes"),
):
    """Run the REST API with uvicorn."""
    import uvicorn
    from shared.config.settings import settings

    port = port or settings.rest_api_port
    console.print(f"[blue]Serving on {host}:{port} ({settings.environment})[/blue]")
    uvicorn.run("rest_api.main:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    app()
