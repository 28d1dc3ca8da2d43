"""In-memory stores for addresses and customers."""

import threading
from dataclasses import dataclass, field, replace

from cep_registry.models import Address, Customer
from cep_registry.store.base import AddressStore, CustomerStore


@dataclass
class InMemoryAddressStore(AddressStore):
    """In-memory address cache keyed by canonical postal code.

    The first write for a postal code wins; later writes for the same key
    return the stored address unchanged.
    """

    addresses: dict[str, Address] = field(default_factory=dict)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def find_by_postal_code(self, postal_code: str) -> Address | None:
        """Get an address by postal code."""
        with self._lock:
            return self.addresses.get(postal_code)

    def save(self, address: Address) -> Address:
        """Add an address to the store."""
        with self._lock:
            return self.addresses.setdefault(address.postal_code, address)

    def summary(self) -> dict[str, int]:
        """Return summary counts."""
        with self._lock:
            return {"addresses": len(self.addresses)}


@dataclass
class InMemoryCustomerStore(CustomerStore):
    """In-memory customer store with sequential integer ids.

    Customers are mutable, so readers and ``save`` hand out copies; the
    stored record changes only through ``save``.
    """

    customers: dict[int, Customer] = field(default_factory=dict)
    _next_id: int = 1
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def find_all(self) -> list[Customer]:
        """Get all customers in insertion order."""
        with self._lock:
            return [replace(c) for c in self.customers.values()]

    def find_by_id(self, customer_id: int) -> Customer | None:
        """Get a customer by id."""
        with self._lock:
            stored = self.customers.get(customer_id)
            return replace(stored) if stored is not None else None

    def save(self, customer: Customer) -> Customer:
        """Insert or update a customer, assigning an id on insert."""
        with self._lock:
            customer_id = customer.customer_id
            if customer_id is None:
                customer_id = self._next_id
            self._next_id = max(self._next_id, customer_id + 1)

            stored = replace(customer, customer_id=customer_id)
            self.customers[customer_id] = stored
            return replace(stored)

    def delete_by_id(self, customer_id: int) -> None:
        """Remove a customer if present."""
        with self._lock:
            self.customers.pop(customer_id, None)

    def summary(self) -> dict[str, int]:
        """Return summary counts."""
        with self._lock:
            return {"customers": len(self.customers)}
