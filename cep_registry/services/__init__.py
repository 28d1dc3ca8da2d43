"""Address resolution and customer services."""

from cep_registry.services.address import AddressResolver
from cep_registry.services.customer import CustomerService, StoreCustomerService

__all__ = ["AddressResolver", "CustomerService", "StoreCustomerService"]
