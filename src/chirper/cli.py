# src/chirper/cli.py
"""
Chirper command line.

Commands:
    chirp:create    - Create a random chirp for a random existing user
    user:create     - Create a user account
    init-db         - Create database tables
    serve           - Run the web server
"""

import argparse
import logging
import sys
from typing import List, Optional

from dotenv import load_dotenv
from rich.console import Console

from .auth import hash_password
from .config import configure_logging, get_config, initialize_config
from .core.container import Container
from .core.errors import ChirperError

logger = logging.getLogger(__name__)

console = Console()


def cmd_chirp_create(container: Container, args: argparse.Namespace) -> int:
    """Create a new chirp."""
    from .seeding import seed_random_chirp

    chirp = seed_random_chirp(
        container.chirp_service(),
        container.user_store(),
        max_length=container.config.chirp_max_length,
    )
    console.print(f"[green]✅ Created chirp {chirp.id}[/green] for user {chirp.user_id}: {chirp.message}")
    return 0


def cmd_user_create(container: Container, args: argparse.Namespace) -> int:
    """Create a user account."""
    user = container.user_store().create(args.name, args.email, hash_password(args.password))
    console.print(f"[green]✅ Created user {user.id}[/green] ({user.email})")
    return 0


def cmd_init_db(container: Container, args: argparse.Namespace) -> int:
    """Create database tables."""
    container.chirp_store()
    container.user_store()
    container.notifications_repository()
    console.print(f"[green]✅ Database ready[/green] ({container.config.database_backend})")
    return 0


def cmd_serve(container: Container, args: argparse.Namespace) -> int:
    """Run the web server."""
    import uvicorn

    host = args.host or container.config.api_host
    port = args.port or container.config.api_port
    uvicorn.run("chirper.main:app", host=host, port=port, reload=args.reload)
    return 0


COMMANDS = {
    "chirp:create": cmd_chirp_create,
    "user:create": cmd_user_create,
    "init-db": cmd_init_db,
    "serve": cmd_serve,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="chirper", description="Chirper command line")
    parser.add_argument("--config-dir", help="Directory holding default.yaml and <env>.yaml")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("chirp:create", help="Create a new chirp")

    user = sub.add_parser("user:create", help="Create a user account")
    user.add_argument("--name", required=True)
    user.add_argument("--email", required=True)
    user.add_argument("--password", required=True)

    sub.add_parser("init-db", help="Create database tables")

    serve = sub.add_parser("serve", help="Run the web server")
    serve.add_argument("--host")
    serve.add_argument("--port", type=int)
    serve.add_argument("--reload", action="store_true")

    return parser


def main(argv: Optional[List[str]] = None, container: Optional[Container] = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)

    if container is None:
        config = initialize_config(args.config_dir) if args.config_dir else get_config()
        configure_logging(config)
        container = Container(config)

    try:
        return COMMANDS[args.command](container, args)
    except ChirperError as e:
        console.print(f"[red]❌ {e}[/red]")
        return 1


if __name__ == "__main__":
    sys.exit(main())
