"""Sample customer payload generator."""

from __future__ import annotations

from typing import Iterable, Iterator

from cep_registry import postal_code as pc
from cep_registry.generators.base import BaseGenerator
from cep_registry.models import Address, Customer


class CustomerGenerator(BaseGenerator):
    """Generate unsaved customer payloads with Brazilian names and CPFs.

    The generated customers carry a pending address (postal code only);
    the registry fills in the rest on ``create``.
    """

    def generate(self, postal_code: str | None = None) -> Customer:
        """Generate a single customer payload.

        Parameters
        ----------
        postal_code : str | None
            Postal code to bind. A random, well-formed (but not necessarily
            existing) postal code is used when omitted.

        Returns
        -------
        Customer
            Customer without ``customer_id``.
        """
        if postal_code is None:
            postal_code = self.postal_code()
        return Customer(
            name=self.fake.name(),
            document=self.fake.cpf(),
            address=Address.pending(postal_code),
        )

    def generate_batch(self, postal_codes: Iterable[str]) -> Iterator[Customer]:
        """Generate one customer per postal code.

        Parameters
        ----------
        postal_codes : Iterable[str]
            Postal codes to bind, in order.

        Yields
        ------
        Customer
            Generated customer payload.
        """
        for postal_code in postal_codes:
            yield self.generate(postal_code)

    def postal_code(self) -> str:
        """Random postal code in canonical ``NNNNN-NNN`` form."""
        return pc.normalize(self.fake.postcode())
