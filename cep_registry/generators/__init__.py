"""Sample data generators."""

from cep_registry.generators.customer import CustomerGenerator

__all__ = ["CustomerGenerator"]
