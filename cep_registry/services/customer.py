"""Customer lifecycle service."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import replace

from cep_registry.exceptions import InvalidInputError
from cep_registry.models import Customer
from cep_registry.services.address import AddressResolver
from cep_registry.store.base import CustomerStore

logger = logging.getLogger(__name__)


class CustomerService(ABC):
    """Customer operations exposed to the transport layer.

    Absence is reported as ``None``; failures are raised.
    """

    @abstractmethod
    def list_all(self) -> list[Customer]:
        """Return all customers."""

    @abstractmethod
    def get_by_id(self, customer_id: int) -> Customer | None:
        """Return a customer, or ``None`` when it does not exist."""

    @abstractmethod
    def create(self, customer: Customer) -> Customer:
        """Resolve the customer's address and persist a new customer."""

    @abstractmethod
    def update(self, customer_id: int, customer: Customer) -> Customer | None:
        """Replace an existing customer; ``None`` when ``customer_id`` is unknown."""

    @abstractmethod
    def delete(self, customer_id: int) -> None:
        """Delete a customer. Unknown ids are ignored."""


class StoreCustomerService(CustomerService):
    """Customer service over a customer store and an address resolver.

    Each write runs validating -> resolving address -> persisting. The
    customer store is only written after the address is resolved and
    persisted, so a stored customer always references a stored address.
    The caller's payload is not mutated; the saved copy is returned.

    Parameters
    ----------
    customer_store : CustomerStore
        Customer persistence.
    resolver : AddressResolver
        Address cache in front of the postal lookup.
    """

    def __init__(self, customer_store: CustomerStore, resolver: AddressResolver) -> None:
        self.customer_store = customer_store
        self.resolver = resolver

    def list_all(self) -> list[Customer]:
        return list(self.customer_store.find_all())

    def get_by_id(self, customer_id: int) -> Customer | None:
        return self.customer_store.find_by_id(customer_id)

    def create(self, customer: Customer) -> Customer:
        """Create a customer bound to the resolved address.

        Raises
        ------
        InvalidInputError
            The payload has no address or a malformed postal code.
        AddressNotFoundError
            The postal code could not be resolved; nothing is written.
        """
        resolved = self._with_resolved_address(customer)
        saved = self.customer_store.save(replace(resolved, customer_id=None))
        logger.info(
            "Created customer %s at %s",
            saved.customer_id,
            saved.postal_code,
            extra={"customer_id": saved.customer_id, "postal_code": saved.postal_code},
        )
        return saved

    def update(self, customer_id: int, customer: Customer) -> Customer | None:
        """Update a customer, re-resolving its address.

        Returns ``None`` without resolving or writing anything when the
        customer does not exist.
        """
        if self.customer_store.find_by_id(customer_id) is None:
            logger.info("Customer %s not found, update skipped", customer_id)
            return None

        resolved = self._with_resolved_address(customer)
        saved = self.customer_store.save(replace(resolved, customer_id=customer_id))
        logger.info(
            "Updated customer %s at %s",
            customer_id,
            saved.postal_code,
            extra={"customer_id": customer_id, "postal_code": saved.postal_code},
        )
        return saved

    def delete(self, customer_id: int) -> None:
        self.customer_store.delete_by_id(customer_id)
        logger.info("Deleted customer %s", customer_id, extra={"customer_id": customer_id})

    def _with_resolved_address(self, customer: Customer) -> Customer:
        address = customer.address
        if address is None or not address.postal_code:
            raise InvalidInputError("Customer payload has no postal code")
        return replace(customer, address=self.resolver.resolve(address.postal_code))
