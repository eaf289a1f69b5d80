from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Dict, List, Optional

from .client import SecretsClient
from .config_loader import load_config
from .errors import InfisicalError

logger = logging.getLogger("infisical-cli")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Read secrets from an Infisical workspace",
    )
    parser.add_argument(
        "--env-file",
        default=None,
        help="Optional .env file with INFISICAL_* settings",
    )
    parser.add_argument(
        "--environment",
        default=None,
        help="Environment slug (defaults to INFISICAL_ENVIRONMENT)",
    )
    parser.add_argument(
        "--workspace",
        default=None,
        help="Workspace slug (defaults to INFISICAL_WORKSPACE)",
    )
    parser.add_argument(
        "--api-url",
        default=None,
        help="API base URL (defaults to INFISICAL_API_URL or the public cloud)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    get_cmd = subparsers.add_parser("get", help="Print a single secret value")
    get_cmd.add_argument("name", help="Secret name")

    list_cmd = subparsers.add_parser("list", help="Print every secret of the environment")
    list_cmd.add_argument(
        "--format",
        choices=("dotenv", "json"),
        default="dotenv",
        help="Output format",
    )

    return parser.parse_args(argv)


def format_secrets(secrets: Dict[str, str], fmt: str) -> str:
    if fmt == "json":
        return json.dumps(secrets, indent=2, sort_keys=True)
    return "\n".join(f"{key}={json.dumps(value)}" for key, value in sorted(secrets.items()))


def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(level=logging.INFO, format="[%(asctime)s] %(levelname)s %(message)s")
    args = parse_args(argv)

    try:
        config = load_config(
            env_file=args.env_file,
            workspace=args.workspace,
            api_url=args.api_url,
        )
        with SecretsClient(config) as client:
            if args.command == "get":
                print(client.get_secret(args.name, args.environment))
            else:
                print(format_secrets(client.get_all_secrets(args.environment), args.format))
    except InfisicalError as exc:
        logger.error("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
