"""Address and customer stores."""

from cep_registry.store.base import AddressStore, CustomerStore
from cep_registry.store.memory import InMemoryAddressStore, InMemoryCustomerStore

__all__ = ["AddressStore", "CustomerStore", "InMemoryAddressStore", "InMemoryCustomerStore"]
