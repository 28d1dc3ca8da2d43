"""External postal lookup clients."""

from cep_registry.lookup.base import PostalLookup
from cep_registry.lookup.viacep import ViaCepClient

__all__ = ["PostalLookup", "ViaCepClient"]
