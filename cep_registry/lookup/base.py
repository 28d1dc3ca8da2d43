"""Postal lookup interface."""

from abc import ABC, abstractmethod

from cep_registry.models import LookupResult


class PostalLookup(ABC):
    """External directory resolving a postal code to address data.

    ``fetch`` reports every failure (non-success status, unusable body,
    transport error, timeout) through the returned ``LookupResult`` instead
    of raising.
    """

    @abstractmethod
    def fetch(self, postal_code: str) -> LookupResult:
        """Look up a canonical postal code."""

    def close(self) -> None:
        """Release network resources."""
