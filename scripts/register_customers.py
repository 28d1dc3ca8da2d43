#!/usr/bin/env python3
"""Register customers, resolving their postal codes through the address cache.

Customers come either from a JSON file (list of ``{"name", "document",
"address"}`` objects) or are generated with Faker for each ``--postal-code``.

Usage::

    python scripts/register_customers.py --postal-code 01310-100 --postal-code 01310100
    python scripts/register_customers.py --input customers.json --backend postgres
"""

import argparse
import json
import logging
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from cep_registry.app import build_registry
from cep_registry.config import RegistryConfig
from cep_registry.exceptions import (
    AddressNotFoundError,
    ConfigurationError,
    InvalidInputError,
    StoreUnavailableError,
)
from cep_registry.generators import CustomerGenerator
from cep_registry.logging import setup_logging
from cep_registry.models import Customer
from cep_registry.serialization import customer_from_dict, to_dict

logger = logging.getLogger("register_customers")


def load_customers(path: Path) -> list[Customer]:
    """Read customer payloads from a JSON file."""
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, dict):
        data = [data]
    return [customer_from_dict(item) for item in data]


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Register customers with cached CEP address resolution"
    )
    parser.add_argument(
        "--postal-code",
        action="append",
        default=[],
        help="Postal code to register a generated customer for (repeatable)",
    )
    parser.add_argument(
        "--input",
        type=Path,
        default=None,
        help="JSON file with customer payloads",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for generated names and documents",
    )
    parser.add_argument(
        "--backend",
        choices=["memory", "postgres"],
        default=None,
        help="Store backend (default: STORE_BACKEND or memory)",
    )
    parser.add_argument(
        "--dedupe-inflight",
        action="store_true",
        help="Collapse concurrent lookups of the same postal code",
    )
    parser.add_argument(
        "--pretty",
        action="store_true",
        help="Pretty-print JSON output",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Log level (default: LOG_LEVEL or INFO)",
    )
    return parser.parse_args(argv)


def load_config(args: argparse.Namespace) -> RegistryConfig:
    """Build the registry config from the environment and CLI overrides."""
    config = RegistryConfig.from_env()
    if args.backend:
        config.store_backend = args.backend
    if args.dedupe_inflight:
        config.dedupe_inflight = True
    if args.log_level:
        config.log_level = args.log_level
    return config.validate()


def main(argv: list[str] | None = None) -> int:
    """Main entry point.

    Returns 0 when every customer is registered, 1 when some were skipped
    and 2 on usage, configuration or store errors.
    """
    args = parse_args(argv)

    try:
        config = load_config(args)
    except ConfigurationError as e:
        setup_logging(args.log_level or "INFO")
        logger.error("Invalid configuration: %s", e)
        return 2

    setup_logging(config.log_level, config.log_format)

    payloads: list[Customer] = []
    if args.input:
        payloads.extend(load_customers(args.input))
    if args.postal_code:
        payloads.extend(CustomerGenerator(seed=args.seed).generate_batch(args.postal_code))

    if not payloads:
        logger.error("Nothing to register: pass --postal-code or --input")
        return 2

    failures = 0
    try:
        with build_registry(config) as registry:
            for payload in payloads:
                try:
                    customer = registry.customers.create(payload)
                except (InvalidInputError, AddressNotFoundError) as e:
                    failures += 1
                    logger.warning("Skipped %s: %s", payload.name, e)
                    continue

                print(json.dumps(to_dict(customer), indent=2 if args.pretty else None, ensure_ascii=False))

            logger.info(
                "Registered %d/%d customers; resolver stats: %s",
                len(payloads) - failures,
                len(payloads),
                registry.resolver.stats(),
            )
    except (ConfigurationError, StoreUnavailableError) as e:
        logger.error("Registration aborted: %s", e)
        return 2

    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
