"""Configuration management for cep-registry."""

from dataclasses import dataclass, field

from cep_registry.exceptions import ConfigurationError

STORE_BACKENDS = ("memory", "postgres")
LOG_FORMATS = ("standard", "json")


@dataclass
class ViaCepConfig:
    """ViaCEP client configuration.

    ``timeout_seconds`` bounds each connect and each read between bytes, not
    the whole lookup. With ``retries`` a lookup makes up to ``retries + 1``
    attempts with a short backoff between them, so a slow or unreachable
    directory costs roughly ``(retries + 1) * timeout_seconds`` before it is
    reported as not found. A server that keeps trickling bytes can stretch
    a single read past that.
    """

    base_url: str = "https://viacep.com.br/ws"
    timeout_seconds: float = 5.0
    retries: int = 1
    user_agent: str = "cep-registry/1.0"


@dataclass
class PostgresConfig:
    """PostgreSQL connection configuration."""

    host: str = "localhost"
    port: int = 5432
    database: str = "cepregistry"
    user: str = "postgres"
    password: str = "postgres"

    @property
    def connection_string(self) -> str:
        """Get connection string."""
        return f"postgresql://{self.user}:{self.password}@{self.host}:{self.port}/{self.database}"


@dataclass
class RegistryConfig:
    """Main configuration for cep-registry."""

    viacep: ViaCepConfig = field(default_factory=ViaCepConfig)
    postgres: PostgresConfig = field(default_factory=PostgresConfig)
    store_backend: str = "memory"
    dedupe_inflight: bool = False
    log_level: str = "INFO"
    log_format: str = "standard"

    def validate(self) -> "RegistryConfig":
        """Check value ranges, returning ``self`` for chaining.

        Raises
        ------
        ConfigurationError
            On an unknown backend or log format, a non-positive timeout
            or negative retries.
        """
        if self.store_backend not in STORE_BACKENDS:
            raise ConfigurationError(
                f"Unknown store backend {self.store_backend!r}, expected one of {STORE_BACKENDS}"
            )
        if self.log_format not in LOG_FORMATS:
            raise ConfigurationError(
                f"Unknown log format {self.log_format!r}, expected one of {LOG_FORMATS}"
            )
        if self.viacep.timeout_seconds <= 0:
            raise ConfigurationError("ViaCEP timeout must be positive")
        if self.viacep.retries < 0:
            raise ConfigurationError("ViaCEP retries cannot be negative")
        return self

    @classmethod
    def from_env(cls) -> "RegistryConfig":
        """Create config from environment variables."""
        import os

        try:
            viacep = ViaCepConfig(
                base_url=os.getenv("VIACEP_URL", "https://viacep.com.br/ws"),
                timeout_seconds=float(os.getenv("VIACEP_TIMEOUT", "5")),
                retries=int(os.getenv("VIACEP_RETRIES", "1")),
            )

            postgres = PostgresConfig(
                host=os.getenv("POSTGRES_HOST", "localhost"),
                port=int(os.getenv("POSTGRES_PORT", "5432")),
                database=os.getenv("POSTGRES_DB", "cepregistry"),
                user=os.getenv("POSTGRES_USER", "postgres"),
                password=os.getenv("POSTGRES_PASSWORD", "postgres"),
            )
        except ValueError as e:
            raise ConfigurationError(f"Invalid numeric setting: {e}") from e

        return cls(
            viacep=viacep,
            postgres=postgres,
            store_backend=os.getenv("STORE_BACKEND", "memory").lower(),
            dedupe_inflight=os.getenv("DEDUPE_INFLIGHT", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "standard").lower(),
        )
