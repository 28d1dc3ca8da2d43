"""Tests for sample data generators."""

from cep_registry import postal_code as pc
from cep_registry.generators import CustomerGenerator


class TestCustomerGenerator:
    """Tests for CustomerGenerator."""

    def test_generate_customer(self, seed: int) -> None:
        gen = CustomerGenerator(seed=seed)
        customer = gen.generate("01310100")

        assert customer.customer_id is None
        assert customer.name
        assert len(customer.document) == 14  # XXX.XXX.XXX-XX
        assert customer.address.postal_code == "01310100"
        assert customer.address.is_resolved is False

    def test_generate_random_postal_code(self, seed: int) -> None:
        customer = CustomerGenerator(seed=seed).generate()

        assert pc.is_valid(customer.postal_code)
        assert customer.postal_code == pc.normalize(customer.postal_code)

    def test_generate_batch(self, seed: int) -> None:
        codes = ["01310-100", "04538-133", "20040-002"]

        customers = list(CustomerGenerator(seed=seed).generate_batch(codes))

        assert [c.postal_code for c in customers] == codes

    def test_reproducible(self, seed: int) -> None:
        first = CustomerGenerator(seed=seed).generate("01310-100")
        second = CustomerGenerator(seed=seed).generate("01310-100")

        assert first == second
