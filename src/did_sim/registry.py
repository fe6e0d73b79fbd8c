"""
In-memory verifiable data registry.

Maps DIDs to DID Documents. All access goes through one lock, so a reader
overlapping a registration sees either the old or the new document in full.
"""

from __future__ import annotations

import logging
import threading

from did_sim.document import DIDDocument

logger = logging.getLogger(__name__)


class VerifiableDataRegistry:
    """Thread-safe store of DID Documents keyed by DID."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._records: dict[str, DIDDocument] = {}

    def register(self, doc: DIDDocument) -> None:
        """Register a DID Document under its ``id``.

        An existing document with the same DID is replaced. The registry
        keeps its own copy, so later changes to ``doc`` are not visible to
        readers.

        Args:
            doc: The document to store.
        """
        stored = doc.copy()
        with self._lock:
            replaced = stored.id in self._records
            self._records[stored.id] = stored
        if replaced:
            logger.debug("Replaced DID Document for %s", stored.id)
        else:
            logger.debug("Registered DID Document for %s", stored.id)

    def lookup(self, did: str) -> DIDDocument | None:
        """Look up the DID Document registered for ``did``.

        Returns:
            A copy of the stored document, or None if the DID is unknown.
        """
        with self._lock:
            doc = self._records.get(did)
            if doc is None:
                return None
            return doc.copy()

    def identifiers(self) -> list[str]:
        """Return the registered DIDs, sorted."""
        with self._lock:
            return sorted(self._records)

    def __contains__(self, did: object) -> bool:
        with self._lock:
            return did in self._records

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
