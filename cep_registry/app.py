"""Composition root wiring stores, lookup and services together."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from cep_registry.config import RegistryConfig
from cep_registry.lookup import PostalLookup, ViaCepClient
from cep_registry.services import AddressResolver, CustomerService, StoreCustomerService
from cep_registry.store import (
    AddressStore,
    CustomerStore,
    InMemoryAddressStore,
    InMemoryCustomerStore,
)

logger = logging.getLogger(__name__)


@dataclass
class Registry:
    """Collaborators built once at process start and owned by the caller."""

    config: RegistryConfig
    address_store: AddressStore
    customer_store: CustomerStore
    lookup: PostalLookup
    resolver: AddressResolver
    customers: CustomerService

    def close(self) -> None:
        """Release network resources held by the lookup client."""
        self.lookup.close()
        logger.info("Registry closed: %s", self.resolver.stats())

    def __enter__(self) -> "Registry":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def build_stores(config: RegistryConfig) -> tuple[AddressStore, CustomerStore]:
    """Create the address and customer stores for the configured backend."""
    if config.store_backend == "postgres":
        from cep_registry.store.postgres import (
            PostgresAddressStore,
            PostgresCustomerStore,
            create_tables,
        )

        connection_string = config.postgres.connection_string
        create_tables(connection_string)
        return PostgresAddressStore(connection_string), PostgresCustomerStore(connection_string)

    return InMemoryAddressStore(), InMemoryCustomerStore()


def build_registry(
    config: RegistryConfig | None = None,
    lookup: PostalLookup | None = None,
) -> Registry:
    """Build a ready-to-use registry.

    Parameters
    ----------
    config : RegistryConfig | None
        Configuration; read from the environment when omitted.
    lookup : PostalLookup | None
        Postal lookup override. Defaults to a ``ViaCepClient``.

    Returns
    -------
    Registry
        Wired collaborators. Call ``close()`` (or use as a context manager)
        when done.
    """
    config = (config or RegistryConfig.from_env()).validate()

    address_store, customer_store = build_stores(config)
    if lookup is None:
        lookup = ViaCepClient(
            base_url=config.viacep.base_url,
            timeout=config.viacep.timeout_seconds,
            retries=config.viacep.retries,
            user_agent=config.viacep.user_agent,
        )

    resolver = AddressResolver(address_store, lookup, dedupe_inflight=config.dedupe_inflight)
    customers = StoreCustomerService(customer_store, resolver)

    logger.info(
        "Registry ready: backend=%s, dedupe_inflight=%s",
        config.store_backend,
        config.dedupe_inflight,
    )
    return Registry(
        config=config,
        address_store=address_store,
        customer_store=customer_store,
        lookup=lookup,
        resolver=resolver,
        customers=customers,
    )
