"""Store interfaces for addresses and customers."""

from abc import ABC, abstractmethod

from cep_registry.models import Address, Customer


class AddressStore(ABC):
    """Key-value store of addresses keyed by canonical postal code.

    Implementations must tolerate a second ``save`` for a postal code that is
    already stored: address content is deterministic per postal code, so the
    duplicate write is either ignored or an identical overwrite.
    """

    @abstractmethod
    def find_by_postal_code(self, postal_code: str) -> Address | None:
        """Return the stored address, or ``None`` when absent."""

    @abstractmethod
    def save(self, address: Address) -> Address:
        """Persist an address and return the stored instance."""


class CustomerStore(ABC):
    """Customer persistence with store-assigned identifiers."""

    @abstractmethod
    def find_all(self) -> list[Customer]:
        """Return every stored customer."""

    @abstractmethod
    def find_by_id(self, customer_id: int) -> Customer | None:
        """Return the customer, or ``None`` when absent."""

    @abstractmethod
    def save(self, customer: Customer) -> Customer:
        """Insert (``customer_id`` is ``None``) or update a customer."""

    @abstractmethod
    def delete_by_id(self, customer_id: int) -> None:
        """Delete a customer. Deleting an unknown id is not an error."""
