"""ViaCEP client for postal code lookups.

See https://viacep.com.br. A lookup is a single ``GET /ws/{cep}/json/``;
unknown postal codes answer ``200`` with ``{"erro": true}`` and malformed
ones answer ``400``.
"""

from __future__ import annotations

import logging
from typing import Any

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from cep_registry import postal_code as pc
from cep_registry.exceptions import InvalidInputError
from cep_registry.lookup.base import PostalLookup
from cep_registry.models import Address, LookupResult

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://viacep.com.br/ws"
DEFAULT_USER_AGENT = "cep-registry/1.0"

# ViaCEP key -> Address field
FIELD_MAP: dict[str, str] = {
    "logradouro": "street",
    "bairro": "neighborhood",
    "localidade": "city",
    "uf": "state_code",
    "complemento": "complement",
    "ibge": "ibge",
    "gia": "gia",
    "ddd": "ddd",
    "siafi": "siafi",
}

REQUIRED_KEYS = ("localidade", "uf")


def parse_payload(postal_code: str, payload: Any, status_code: int = 200) -> LookupResult:
    """Turn a ViaCEP response body into a lookup result.

    Parameters
    ----------
    postal_code : str
        Canonical postal code that was requested.
    payload : Any
        Decoded JSON body.
    status_code : int
        HTTP status of the response.

    Returns
    -------
    LookupResult
        Success only for a well-formed address payload.
    """
    if not isinstance(payload, dict) or not payload:
        return LookupResult.failure(postal_code, "empty response body", status_code)

    if str(payload.get("erro", "")).lower() == "true":
        return LookupResult.failure(postal_code, "postal code not found", status_code)

    missing = [key for key in REQUIRED_KEYS if not payload.get(key)]
    if missing:
        return LookupResult.failure(
            postal_code, f"incomplete payload, missing {', '.join(missing)}", status_code
        )

    returned = payload.get("cep")
    if returned:
        try:
            if pc.normalize(str(returned)) != postal_code:
                return LookupResult.failure(
                    postal_code, f"payload is for postal code {returned}", status_code
                )
        except InvalidInputError:
            return LookupResult.failure(postal_code, f"malformed postal code {returned!r} in payload", status_code)

    values = {attr: str(payload.get(key) or "") for key, attr in FIELD_MAP.items()}
    return LookupResult.success(Address(postal_code=postal_code, **values), status_code)


class ViaCepClient(PostalLookup):
    """HTTP client for the ViaCEP directory.

    Parameters
    ----------
    base_url : str
        Service root (default ``https://viacep.com.br/ws``).
    timeout : float
        Connect and read timeout in seconds, applied to every attempt
        (see ``ViaCepConfig``). A timeout is reported as a failed lookup,
        never raised.
    retries : int
        Retries on connection errors and 502/503/504 responses.
    session : requests.Session | None
        Pre-built session (mainly for tests).
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 5.0,
        retries: int = 1,
        user_agent: str = DEFAULT_USER_AGENT,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or self._build_session(retries)
        self.session.headers.update({"Accept": "application/json", "User-Agent": user_agent})

    @staticmethod
    def _build_session(retries: int) -> requests.Session:
        session = requests.Session()
        if retries > 0:
            retry = Retry(
                total=retries,
                backoff_factor=0.3,
                status_forcelist=(502, 503, 504),
                allowed_methods=("GET",),
            )
            adapter = HTTPAdapter(max_retries=retry)
            session.mount("https://", adapter)
            session.mount("http://", adapter)
        return session

    def url_for(self, postal_code: str) -> str:
        """Build the lookup URL for a postal code."""
        return f"{self.base_url}/{pc.digits_only(postal_code)}/json/"

    def fetch(self, postal_code: str) -> LookupResult:
        """Query ViaCEP for a postal code.

        Parameters
        ----------
        postal_code : str
            Postal code in any accepted format.

        Returns
        -------
        LookupResult
            Address on success, otherwise a failure with status and reason.

        Raises
        ------
        InvalidInputError
            If the postal code is malformed (no request is sent).
        """
        code = pc.normalize(postal_code)
        url = self.url_for(code)
        logger.debug("GET %s", url)

        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.exceptions.Timeout:
            logger.warning("ViaCEP lookup for %s timed out after %.1fs", code, self.timeout)
            return LookupResult.failure(code, f"timed out after {self.timeout}s")
        except requests.exceptions.RequestException as e:
            logger.warning("ViaCEP lookup for %s failed: %s", code, e)
            return LookupResult.failure(code, f"request failed: {e}")

        if not response.ok:
            return LookupResult.failure(
                code, f"HTTP {response.status_code}", response.status_code
            )

        try:
            payload = response.json()
        except ValueError:
            return LookupResult.failure(code, "malformed response body", response.status_code)

        return parse_payload(code, payload, response.status_code)

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self.session.close()
