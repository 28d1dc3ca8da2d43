"""Read-through address resolution."""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Iterator

from cep_registry import postal_code as pc
from cep_registry.exceptions import AddressNotFoundError
from cep_registry.lookup.base import PostalLookup
from cep_registry.models import Address
from cep_registry.store.base import AddressStore

logger = logging.getLogger(__name__)


class AddressResolver:
    """Resolve postal codes to canonical, persisted addresses.

    The address store is consulted first; only on a miss is the external
    lookup called, and a successful result is saved before being returned.
    A failed lookup persists nothing.

    Without ``dedupe_inflight`` the check-fetch-save sequence is not atomic:
    concurrent resolutions of the same uncached postal code may each call
    the lookup, and the store absorbs the duplicate write. With it, callers
    for the same postal code are serialized and all but the first are served
    from the store.

    Parameters
    ----------
    address_store : AddressStore
        Persistent address cache.
    lookup : PostalLookup
        External postal directory.
    dedupe_inflight : bool
        Collapse concurrent lookups of the same postal code.
    """

    def __init__(
        self,
        address_store: AddressStore,
        lookup: PostalLookup,
        dedupe_inflight: bool = False,
    ) -> None:
        self.address_store = address_store
        self.lookup = lookup
        self.dedupe_inflight = dedupe_inflight
        self._guard = threading.Lock()
        self._inflight: dict[str, list] = {}  # postal code -> [lock, waiters]
        self._stats = {"cache_hits": 0, "lookups": 0, "failures": 0}

    def resolve(self, postal_code: str) -> Address:
        """Return the address for a postal code.

        Raises
        ------
        InvalidInputError
            Malformed postal code; raised before any store or network access.
        AddressNotFoundError
            The lookup failed, timed out or returned unusable data.
        StoreUnavailableError
            The address store could not be read or written.
        """
        code = pc.normalize(postal_code)

        cached = self._cached(code)
        if cached is not None:
            return cached

        if not self.dedupe_inflight:
            return self._fetch_and_save(code)

        with self._inflight_lock(code):
            cached = self._cached(code)
            if cached is not None:
                return cached
            return self._fetch_and_save(code)

    def stats(self) -> dict[str, int]:
        """Return resolution counters."""
        with self._guard:
            return dict(self._stats)

    def _cached(self, code: str) -> Address | None:
        address = self.address_store.find_by_postal_code(code)
        if address is not None:
            self._count("cache_hits")
            logger.debug("Address cache hit for %s", code)
        return address

    def _fetch_and_save(self, code: str) -> Address:
        self._count("lookups")
        try:
            result = self.lookup.fetch(code)
        except TimeoutError as e:
            self._count("failures")
            raise AddressNotFoundError(code, "lookup timed out") from e

        if not result.ok:
            self._count("failures")
            logger.warning(
                "Lookup for %s failed (status=%s): %s",
                code,
                result.status_code,
                result.reason,
                extra={"postal_code": code, "status_code": result.status_code, "reason": result.reason},
            )
            raise AddressNotFoundError(code, result.reason or "lookup failed")

        address = result.address
        if address.postal_code != code:
            self._count("failures")
            raise AddressNotFoundError(code, f"lookup returned postal code {address.postal_code}")

        stored = self.address_store.save(address)
        logger.info(
            "Cached address %s (%s/%s)", code, stored.city, stored.state_code, extra={"postal_code": code}
        )
        return stored

    def _count(self, key: str) -> None:
        with self._guard:
            self._stats[key] += 1

    @contextmanager
    def _inflight_lock(self, code: str) -> Iterator[None]:
        with self._guard:
            entry = self._inflight.setdefault(code, [threading.Lock(), 0])
            entry[1] += 1
        try:
            with entry[0]:
                yield
        finally:
            with self._guard:
                entry[1] -= 1
                if entry[1] == 0:
                    del self._inflight[code]
