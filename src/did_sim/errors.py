"""Exceptions raised by did_sim."""


class DIDSimError(Exception):
    """Base class for did_sim errors."""


class KeyGenerationError(DIDSimError):
    """Raised when a controller key pair cannot be generated."""


class DIDDocumentError(DIDSimError):
    """Raised when a DID Document cannot be parsed."""
