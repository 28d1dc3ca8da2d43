"""PostgreSQL-backed stores using psycopg."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import fields
from typing import Any, Iterator

import psycopg
from psycopg.rows import dict_row

from cep_registry.exceptions import StoreUnavailableError
from cep_registry.models import Address, Customer
from cep_registry.store.base import AddressStore, CustomerStore

logger = logging.getLogger(__name__)

ADDRESS_COLUMNS = [f.name for f in fields(Address)]

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS addresses (
    postal_code VARCHAR(9) PRIMARY KEY,
    street TEXT NOT NULL DEFAULT '',
    neighborhood TEXT NOT NULL DEFAULT '',
    city TEXT NOT NULL DEFAULT '',
    state_code VARCHAR(2) NOT NULL DEFAULT '',
    complement TEXT NOT NULL DEFAULT '',
    ibge TEXT NOT NULL DEFAULT '',
    gia TEXT NOT NULL DEFAULT '',
    ddd TEXT NOT NULL DEFAULT '',
    siafi TEXT NOT NULL DEFAULT ''
);

CREATE TABLE IF NOT EXISTS customers (
    customer_id BIGSERIAL PRIMARY KEY,
    name TEXT NOT NULL,
    document TEXT NOT NULL,
    postal_code VARCHAR(9) NOT NULL REFERENCES addresses (postal_code)
);
"""

_ADDRESS_SELECT = ", ".join(f"a.{col}" for col in ADDRESS_COLUMNS)

_CUSTOMER_SELECT = f"""
SELECT c.customer_id, c.name, c.document, {_ADDRESS_SELECT}
FROM customers c
JOIN addresses a ON a.postal_code = c.postal_code
"""


@contextmanager
def _connect(connection_string: str) -> Iterator[psycopg.Connection]:
    """Open a connection, committing on success and mapping driver errors."""
    try:
        with psycopg.connect(connection_string, row_factory=dict_row) as conn:
            yield conn
    except psycopg.Error as e:
        logger.error("PostgreSQL operation failed: %s", e)
        raise StoreUnavailableError(f"PostgreSQL unavailable: {e}") from e


def create_tables(connection_string: str) -> None:
    """Create the addresses and customers tables if missing."""
    with _connect(connection_string) as conn:
        conn.execute(SCHEMA_SQL)
    logger.info("PostgreSQL schema ready")


def _row_to_address(row: dict[str, Any]) -> Address:
    return Address(**{col: row[col] or "" for col in ADDRESS_COLUMNS})


def _row_to_customer(row: dict[str, Any]) -> Customer:
    return Customer(
        customer_id=row["customer_id"],
        name=row["name"],
        document=row["document"],
        address=_row_to_address(row),
    )


class PostgresAddressStore(AddressStore):
    """Address store backed by the ``addresses`` table.

    Duplicate writes for the same postal code are ignored
    (``ON CONFLICT DO NOTHING``) and the stored row is returned.
    """

    def __init__(self, connection_string: str) -> None:
        self.connection_string = connection_string

    def find_by_postal_code(self, postal_code: str) -> Address | None:
        with _connect(self.connection_string) as conn:
            row = conn.execute(
                f"SELECT {', '.join(ADDRESS_COLUMNS)} FROM addresses WHERE postal_code = %s",
                (postal_code,),
            ).fetchone()
        return _row_to_address(row) if row else None

    def save(self, address: Address) -> Address:
        placeholders = ", ".join(["%s"] * len(ADDRESS_COLUMNS))
        values = tuple(getattr(address, col) for col in ADDRESS_COLUMNS)
        with _connect(self.connection_string) as conn:
            row = conn.execute(
                f"INSERT INTO addresses ({', '.join(ADDRESS_COLUMNS)}) VALUES ({placeholders}) "
                f"ON CONFLICT (postal_code) DO NOTHING "
                f"RETURNING {', '.join(ADDRESS_COLUMNS)}",
                values,
            ).fetchone()
            if row is None:
                logger.debug("Address %s already stored; keeping existing row", address.postal_code)
                row = conn.execute(
                    f"SELECT {', '.join(ADDRESS_COLUMNS)} FROM addresses WHERE postal_code = %s",
                    (address.postal_code,),
                ).fetchone()
        return _row_to_address(row) if row else address


class PostgresCustomerStore(CustomerStore):
    """Customer store backed by the ``customers`` table."""

    def __init__(self, connection_string: str) -> None:
        self.connection_string = connection_string

    def find_all(self) -> list[Customer]:
        with _connect(self.connection_string) as conn:
            rows = conn.execute(_CUSTOMER_SELECT + " ORDER BY c.customer_id").fetchall()
        return [_row_to_customer(row) for row in rows]

    def find_by_id(self, customer_id: int) -> Customer | None:
        with _connect(self.connection_string) as conn:
            row = conn.execute(
                _CUSTOMER_SELECT + " WHERE c.customer_id = %s",
                (customer_id,),
            ).fetchone()
        return _row_to_customer(row) if row else None

    def save(self, customer: Customer) -> Customer:
        with _connect(self.connection_string) as conn:
            if customer.customer_id is None:
                row = conn.execute(
                    "INSERT INTO customers (name, document, postal_code) "
                    "VALUES (%s, %s, %s) RETURNING customer_id",
                    (customer.name, customer.document, customer.postal_code),
                ).fetchone()
            else:
                row = conn.execute(
                    "INSERT INTO customers (customer_id, name, document, postal_code) "
                    "VALUES (%s, %s, %s, %s) "
                    "ON CONFLICT (customer_id) DO UPDATE SET "
                    "name = EXCLUDED.name, document = EXCLUDED.document, "
                    "postal_code = EXCLUDED.postal_code "
                    "RETURNING customer_id",
                    (customer.customer_id, customer.name, customer.document, customer.postal_code),
                ).fetchone()
        return Customer(
            customer_id=row["customer_id"],
            name=customer.name,
            document=customer.document,
            address=customer.address,
        )

    def delete_by_id(self, customer_id: int) -> None:
        with _connect(self.connection_string) as conn:
            conn.execute("DELETE FROM customers WHERE customer_id = %s", (customer_id,))
