"""Domain models for the customer registry."""

from cep_registry.models.address import Address, LookupResult
from cep_registry.models.customer import Customer

__all__ = ["Address", "Customer", "LookupResult"]
