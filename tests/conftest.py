"""Pytest configuration and fixtures."""

import pytest

from cep_registry.lookup.base import PostalLookup
from cep_registry.models import Address, Customer, LookupResult
from cep_registry.services import AddressResolver, StoreCustomerService
from cep_registry.store import InMemoryAddressStore, InMemoryCustomerStore


class RecordingLookup(PostalLookup):
    """Postal lookup double returning canned results and recording calls."""

    def __init__(self, results: dict[str, LookupResult] | None = None) -> None:
        self.results = results or {}
        self.calls: list[str] = []
        self.closed = False

    def add(self, address: Address) -> None:
        self.results[address.postal_code] = LookupResult.success(address)

    def fetch(self, postal_code: str) -> LookupResult:
        self.calls.append(postal_code)
        return self.results.get(
            postal_code,
            LookupResult.failure(postal_code, "postal code not found", 200),
        )

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def paulista() -> Address:
    """Address returned by the directory for 01310-100."""
    return Address(
        postal_code="01310-100",
        street="Avenida Paulista",
        neighborhood="Bela Vista",
        city="São Paulo",
        state_code="SP",
        complement="de 612 a 1510 - lado par",
        ibge="3550308",
        gia="1004",
        ddd="11",
        siafi="7107",
    )


@pytest.fixture
def lookup(paulista: Address) -> RecordingLookup:
    """Lookup that knows 01310-100 and nothing else."""
    fake = RecordingLookup()
    fake.add(paulista)
    return fake


@pytest.fixture
def address_store() -> InMemoryAddressStore:
    """Create a fresh address store for each test."""
    return InMemoryAddressStore()


@pytest.fixture
def customer_store() -> InMemoryCustomerStore:
    """Create a fresh customer store for each test."""
    return InMemoryCustomerStore()


@pytest.fixture
def resolver(address_store: InMemoryAddressStore, lookup: RecordingLookup) -> AddressResolver:
    return AddressResolver(address_store, lookup)


@pytest.fixture
def service(
    customer_store: InMemoryCustomerStore, resolver: AddressResolver
) -> StoreCustomerService:
    return StoreCustomerService(customer_store, resolver)


@pytest.fixture
def ana() -> Customer:
    """Incoming payload carrying only a postal code."""
    return Customer(
        name="Ana",
        document="123.456.789-09",
        address=Address.pending("01310-100"),
    )
