"""Custom exception hierarchy for cep-registry."""


class CepRegistryError(Exception):
    """Base exception for all cep-registry errors."""


class InvalidInputError(CepRegistryError):
    """Raised when a postal code is malformed. No I/O has been attempted."""


class AddressNotFoundError(CepRegistryError):
    """Raised when the postal lookup failed or returned unusable data.

    Parameters
    ----------
    postal_code : str
        Postal code that could not be resolved.
    reason : str
        Short description of why the lookup failed.
    """

    def __init__(self, postal_code: str, reason: str) -> None:
        super().__init__(f"Address for postal code {postal_code} not found: {reason}")
        self.postal_code = postal_code
        self.reason = reason


class StoreUnavailableError(CepRegistryError):
    """Raised when the underlying store cannot be read or written."""


class ConfigurationError(CepRegistryError):
    """Raised when configuration is invalid or missing."""
