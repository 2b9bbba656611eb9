"""Command-line interface for Family Registry."""

import argparse
import asyncio
import sys
from pathlib import Path

from family_registry.domain.views import FamilyView
from family_registry.exceptions import FamilyRegistryError
from family_registry.repositories.sqlite import (
    SQLiteBasicServiceRepository,
    SQLiteDatabase,
    SQLiteFamilyRepository,
)
from family_registry.services.events import FamilyEventPublisher, LoggingEventSink
from family_registry.services.families import FamilyAggregateManager


def get_default_db_path() -> Path:
    """Get the default database path in user's home directory."""
    return Path.home() / ".family_registry" / "registry.db"


def _db_path(args: argparse.Namespace) -> Path:
    return Path(args.database) if args.database else get_default_db_path()


def create_manager(db_path: Path) -> tuple[SQLiteDatabase, FamilyAggregateManager]:
    """Open the database and wire an aggregate manager over it."""
    db = SQLiteDatabase(str(db_path))
    db.initialize()
    manager = FamilyAggregateManager(
        family_repo=SQLiteFamilyRepository(db),
        service_repo=SQLiteBasicServiceRepository(db),
        publisher=FamilyEventPublisher(LoggingEventSink()),
    )
    return db, manager


def _print_family(view: FamilyView) -> None:
    status = view.status.label if view.status else "Unknown"
    print(f"  #{view.id} {view.last_name or '(no last name)'} [{status}]")
    if view.direction:
        print(f"    Address: {view.direction}")
    if view.number_members is not None:
        print(f"    Members: {view.number_members}")
    if view.basic_service is not None:
        service = view.basic_service
        print(f"    Basic service: #{service.service_id}")
        if service.water_service:
            print(f"      Water: {service.water_service}")
        if service.serv_light:
            print(f"      Electricity: {service.serv_light}")


def cmd_init(args: argparse.Namespace) -> int:
    """Initialize a new database."""
    db_path = _db_path(args)

    if db_path.exists() and not args.force:
        print(f"Database already exists at {db_path}")
        print("Use --force to reinitialize (WARNING: will delete existing data)")
        return 1

    if db_path.exists() and args.force:
        db_path.unlink()

    db_path.parent.mkdir(parents=True, exist_ok=True)
    db = SQLiteDatabase(str(db_path))
    db.initialize()
    db.close()

    print(f"Initialized database at {db_path}")
    return 0


async def _list(manager: FamilyAggregateManager, inactive: bool) -> int:
    views = manager.list_inactive() if inactive else manager.list_active()
    count = 0
    async for view in views:
        if count == 0:
            print("Inactive families:" if inactive else "Active families:")
            print("=" * 70)
        _print_family(view)
        count += 1
    if count == 0:
        print("No families found.")
    return 0


async def _show(manager: FamilyAggregateManager, family_id: int) -> int:
    view = await manager.get_detail(family_id)
    if view is None:
        print(f"Error: Family {family_id} not found")
        return 1
    _print_family(view)
    return 0


async def _change_status(
    manager: FamilyAggregateManager, family_id: int, activate: bool
) -> int:
    try:
        if activate:
            await manager.activate(family_id)
        else:
            await manager.deactivate(family_id)
    except FamilyRegistryError as e:
        print(f"Error: {e.message}")
        return 1
    finally:
        await manager.publisher.drain()
    print(f"Family {family_id} {'activated' if activate else 'deactivated'}")
    return 0


def _run_with_manager(args: argparse.Namespace, run) -> int:
    db_path = _db_path(args)
    if not db_path.exists():
        print(f"Error: Database not found at {db_path}")
        print("Run 'family-registry init' to create a new database")
        return 1
    db, manager = create_manager(db_path)
    try:
        return asyncio.run(run(manager))
    finally:
        db.close()


def cmd_list(args: argparse.Namespace) -> int:
    """List active (or inactive) families."""
    return _run_with_manager(args, lambda m: _list(m, args.inactive))


def cmd_show(args: argparse.Namespace) -> int:
    """Show one family with its basic service."""
    return _run_with_manager(args, lambda m: _show(m, args.family_id))


def cmd_deactivate(args: argparse.Namespace) -> int:
    """Mark a family inactive."""
    return _run_with_manager(args, lambda m: _change_status(m, args.family_id, False))


def cmd_activate(args: argparse.Namespace) -> int:
    """Mark a family active."""
    return _run_with_manager(args, lambda m: _change_status(m, args.family_id, True))


def cmd_serve(args: argparse.Namespace) -> int:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    from family_registry.config import get_settings

    settings = get_settings()
    uvicorn.run(
        "family_registry.api.app:app",
        host=args.host or settings.api_host,
        port=args.port or settings.api_port,
        reload=args.reload,
    )
    return 0


def cmd_version(args: argparse.Namespace) -> int:
    """Show version information."""
    from family_registry import __version__

    print(f"Family Registry v{__version__}")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="family-registry",
        description="Family Registry - household records and basic services",
    )
    parser.add_argument(
        "--database",
        "-d",
        help="Path to SQLite database file",
        default=None,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    init_parser = subparsers.add_parser("init", help="Initialize a new database")
    init_parser.add_argument(
        "--force",
        "-f",
        action="store_true",
        help="Force reinitialization (deletes existing data)",
    )
    init_parser.set_defaults(func=cmd_init)

    list_parser = subparsers.add_parser("list", help="List families")
    list_parser.add_argument(
        "--inactive",
        action="store_true",
        help="List inactive families instead of active ones",
    )
    list_parser.set_defaults(func=cmd_list)

    show_parser = subparsers.add_parser("show", help="Show a family")
    show_parser.add_argument("family_id", type=int, help="Family ID")
    show_parser.set_defaults(func=cmd_show)

    deactivate_parser = subparsers.add_parser(
        "deactivate", help="Mark a family inactive"
    )
    deactivate_parser.add_argument("family_id", type=int, help="Family ID")
    deactivate_parser.set_defaults(func=cmd_deactivate)

    activate_parser = subparsers.add_parser("activate", help="Mark a family active")
    activate_parser.add_argument("family_id", type=int, help="Family ID")
    activate_parser.set_defaults(func=cmd_activate)

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default=None, help="Bind address")
    serve_parser.add_argument("--port", type=int, default=None, help="Bind port")
    serve_parser.add_argument(
        "--reload", action="store_true", help="Enable auto-reload (development only)"
    )
    serve_parser.set_defaults(func=cmd_serve)

    version_parser = subparsers.add_parser("version", help="Show version")
    version_parser.set_defaults(func=cmd_version)

    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
