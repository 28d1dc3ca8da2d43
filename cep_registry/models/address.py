"""Address and postal lookup models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Address:
    """Postal address resolved from a Brazilian CEP.

    Addresses are immutable and identified solely by ``postal_code``
    (canonical ``NNNNN-NNN`` format). Many customers may share one.

    Fields follow the postal directory payload:
    - street: logradouro
    - neighborhood: bairro
    - city: localidade
    - state_code: UF abbreviation (e.g. ``"SP"``)
    - ibge/gia/ddd/siafi: directory codes, empty when unknown
    """

    postal_code: str
    street: str = ""
    neighborhood: str = ""
    city: str = ""
    state_code: str = ""
    complement: str = ""
    ibge: str = ""
    gia: str = ""
    ddd: str = ""
    siafi: str = ""

    @classmethod
    def pending(cls, postal_code: str) -> "Address":
        """Placeholder carrying only the postal code of an incoming payload."""
        return cls(postal_code=postal_code)

    @property
    def is_resolved(self) -> bool:
        """Whether the address carries directory data beyond its postal code."""
        return bool(self.city and self.state_code)


@dataclass(frozen=True)
class LookupResult:
    """Outcome of a single external postal lookup. Never persisted."""

    postal_code: str
    status_code: int | None = None
    address: Address | None = None
    reason: str = ""

    @property
    def ok(self) -> bool:
        """True when the lookup produced a usable address."""
        return self.address is not None

    @classmethod
    def success(cls, address: Address, status_code: int = 200) -> "LookupResult":
        return cls(postal_code=address.postal_code, status_code=status_code, address=address)

    @classmethod
    def failure(
        cls,
        postal_code: str,
        reason: str,
        status_code: int | None = None,
    ) -> "LookupResult":
        return cls(postal_code=postal_code, status_code=status_code, reason=reason)
