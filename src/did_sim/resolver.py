"""
DID Resolver backed by a VerifiableDataRegistry.
"""

from __future__ import annotations

from did_sim.document import DIDDocument
from did_sim.registry import VerifiableDataRegistry


class DIDResolver:
    """Read-only access point to one registry."""

    def __init__(self, registry: VerifiableDataRegistry) -> None:
        """Initialize the DID resolver.

        Args:
            registry: Registry to resolve against. It is shared, not owned.
        """
        self.registry = registry

    def resolve(self, did: str) -> DIDDocument | None:
        """Resolve a DID to its DID Document.

        The DID is looked up exactly as given.

        Args:
            did: The DID to resolve.

        Returns:
            The resolved DIDDocument, or None if the DID is not registered.
        """
        return self.registry.lookup(did)
