"""Customer registry with cached postal code (CEP) address resolution."""

__version__ = "0.1.0"
