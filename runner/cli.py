from __future__ import annotations

import argparse
import os


def parse_args(argv: list[str]) -> argparse.Namespace:
    """Parse CLI arguments for the smoke runner."""
    parser = argparse.ArgumentParser(description="SuperTokens core client smoke runner")
    parser.add_argument(
        "--core-url", default=os.getenv("SUPERTOKENS_CORE_DOMAIN", "http://127.0.0.1:3567")
    )
    parser.add_argument("--api-key", default=os.getenv("SUPERTOKENS_API_KEY", ""))
    parser.add_argument("--app-id", default=os.getenv("SUPERTOKENS_APP_ID", "public"))
    parser.add_argument("--tenant-id", default=os.getenv("SUPERTOKENS_TENANT_ID", "public"))
    parser.add_argument("--email", required=True)
    parser.add_argument("--password", required=True)
    parser.add_argument("--role", default=None, help="Also grant this role to the signed-in user")
    parser.add_argument("--timeout", type=float, default=10.0)
    parser.add_argument("--wait", type=float, default=20.0, help="Seconds to wait for /hello")
    return parser.parse_args(argv)
