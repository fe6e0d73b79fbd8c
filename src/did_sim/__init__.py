"""
did-sim - Decentralized identifier lifecycle simulation.

Supports:
- P-256 (secp256r1) controller key generation
- DID Document construction with verification methods and service endpoints
- Thread-safe in-memory verifiable data registry
- DID resolution against a shared registry
"""

from did_sim.document import DIDDocument, VerificationMethod
from did_sim.errors import DIDDocumentError, DIDSimError, KeyGenerationError
from did_sim.registry import VerifiableDataRegistry
from did_sim.resolver import DIDResolver
from did_sim.simulation import SimulationResult, simulate

__version__ = "0.1.0"

__all__ = [
    "DIDDocument",
    "VerificationMethod",
    "DIDSimError",
    "DIDDocumentError",
    "KeyGenerationError",
    "VerifiableDataRegistry",
    "DIDResolver",
    "SimulationResult",
    "simulate",
]
