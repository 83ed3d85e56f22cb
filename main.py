#!/usr/bin/env python3
"""
Presale tracker - API server, admin bootstrap and countdown client.
"""

import argparse
import logging
import sys
from typing import Optional

# Configure logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s", stream=sys.stderr
)
logger = logging.getLogger(__name__)

#
# NOTE: Keep presale imports lazy (inside functions) so the countdown client does not pull
# in FastAPI/psycopg and the server does not pull in requests.
#


def init_admin_from_env() -> int:
    """Run the admin bootstrap directly (same rules as GET /api/init-admin)."""
    from presale.auth.config import load_auth_config
    from presale.auth.local import PasswordPolicyError, initialize_admin
    from presale.storage.factory import get_store, reset_store

    try:
        initialize_admin(get_store(), load_auth_config().admin_password)
    except PasswordPolicyError as e:
        print(str(e), file=sys.stderr)
        return 2
    except Exception:
        logger.exception("Admin initialization failed")
        print("Failed to initialize admin", file=sys.stderr)
        return 1
    finally:
        reset_store()
    print("Admin created or updated")
    return 0


def run_countdown_cli(url: Optional[str]) -> None:
    import asyncio

    from presale.countdown.display import TerminalDisplay
    from presale.countdown.timer import start_countdown

    display = TerminalDisplay()
    try:
        asyncio.run(start_countdown(display, url))
    except KeyboardInterrupt:
        pass
    finally:
        print()


def main():
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Presale tracker backend and countdown",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run the API locally (skipped when APP_ENV=production)
  python main.py --serve --port 5000

  # Set/reset the admin password from ADMIN_PASSWORD
  python main.py --init-admin

  # Show the presale countdown in the terminal
  python main.py --countdown
        """,
    )

    parser.add_argument("--serve", action="store_true", help="Run the HTTP API with uvicorn")
    parser.add_argument("--host", default="0.0.0.0", help="API bind host (default: 0.0.0.0)")
    parser.add_argument("--port", type=int, default=None, help="API listen port (default: $PORT or 5000)")
    parser.add_argument(
        "--init-admin", action="store_true", help="Create or reset the admin password from ADMIN_PASSWORD"
    )
    parser.add_argument("--countdown", action="store_true", help="Render the presale countdown in the terminal")
    parser.add_argument(
        "--presale-url", default=None, help="Presale end time endpoint (default: $PRESALE_TIME_URL or built-in)"
    )

    args = parser.parse_args()

    try:
        if args.serve:
            from presale.api.server import run as run_server

            run_server(host=args.host, port=args.port)
            return

        if args.init_admin:
            sys.exit(init_admin_from_env())

        if args.countdown:
            run_countdown_cli(args.presale_url)
            return

        parser.print_help()

    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        raise


if __name__ == "__main__":
    main()
