"""Customer model."""

from dataclasses import dataclass

from cep_registry.models.address import Address


@dataclass
class Customer:
    """Registered customer bound to a shared postal address."""

    name: str
    document: str  # CPF
    address: Address
    customer_id: int | None = None  # assigned by the customer store on insert

    @property
    def postal_code(self) -> str:
        """Postal code of the bound (or requested) address."""
        return self.address.postal_code
