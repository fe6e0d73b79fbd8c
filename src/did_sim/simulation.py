"""
DID lifecycle simulation.

Generate a controller key, build a DID Document, register it and resolve
it back by DID.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass

from did_sim.builder import build_document
from did_sim.document import DIDDocument
from did_sim.keys import generate_key_pair, public_key_bytes
from did_sim.registry import VerifiableDataRegistry
from did_sim.resolver import DIDResolver

logger = logging.getLogger(__name__)


@dataclass
class SimulationResult:
    """Outcome of one register/resolve round trip."""

    did: str
    registered: DIDDocument
    resolved: DIDDocument | None = None

    @property
    def found(self) -> bool:
        """Whether the registered DID resolved."""
        return self.resolved is not None


def register_and_resolve(
    doc: DIDDocument,
    registry: VerifiableDataRegistry | None = None,
) -> SimulationResult:
    """Register a document and resolve it back through a resolver.

    Args:
        doc: The DID Document to register.
        registry: Registry to use. A fresh one is created if not provided.

    Returns:
        SimulationResult with the registered and resolved documents.
    """
    registry = registry if registry is not None else VerifiableDataRegistry()
    resolver = DIDResolver(registry)

    registry.register(doc)
    resolved = resolver.resolve(doc.id)
    if resolved is None:
        logger.warning("DID %s not found after registration", doc.id)

    return SimulationResult(did=doc.id, registered=doc, resolved=resolved)


def simulate(
    subject_id: str = "subject1",
    service_endpoints: Mapping[str, str] | None = None,
    method: str = "example",
    registry: VerifiableDataRegistry | None = None,
) -> SimulationResult:
    """Run the full DID lifecycle for one subject.

    Args:
        subject_id: Method-specific identifier of the subject.
        service_endpoints: Endpoint name to URI mapping for the document.
        method: DID method name.
        registry: Registry to use. A fresh one is created if not provided.

    Returns:
        SimulationResult for the subject's DID.

    Raises:
        KeyGenerationError: If the controller key cannot be generated.
    """
    private_key = generate_key_pair()
    doc = build_document(
        subject_id,
        public_key_bytes(private_key),
        service_endpoints=service_endpoints,
        method=method,
    )
    logger.info("Built DID Document for %s", doc.id)
    return register_and_resolve(doc, registry)
