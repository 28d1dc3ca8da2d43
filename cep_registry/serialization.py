"""Serialization helpers for JSON input and output of registry models."""

from dataclasses import asdict
from typing import Any

from cep_registry.models import Address, Customer


def to_dict(record: Customer | Address) -> dict[str, Any]:
    """Convert a customer or address, nested address included, to a dict."""
    return asdict(record)


def customer_from_dict(data: dict[str, Any]) -> Customer:
    """Build a customer payload from a decoded JSON object.

    ``address`` may be a postal code string or an object with a
    ``postal_code`` key; either way only the postal code is kept, the rest
    of the address comes from resolution.
    """
    address = data.get("address")
    if isinstance(address, dict):
        postal_code = address.get("postal_code", "")
    else:
        postal_code = address or ""

    return Customer(
        name=data.get("name", ""),
        document=data.get("document", ""),
        address=Address.pending(str(postal_code)),
        customer_id=data.get("customer_id"),
    )
