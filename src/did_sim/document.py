"""
DID Document data model.

Simplified W3C DID Document: verification methods, verification
relationships and named service endpoints.
https://www.w3.org/TR/did-core/
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any

from did_sim.errors import DIDDocumentError

DID_CONTEXT = "https://www.w3.org/ns/did/v1"

# Verification relationships defined by DID Core.
RELATIONSHIPS = (
    "authentication",
    "assertionMethod",
    "keyAgreement",
    "capabilityInvocation",
    "capabilityDelegation",
)

# Top-level keys that can never name a verification relationship.
RESERVED_KEYS = frozenset(
    {"@context", "id", "controller", "verificationMethod", "service"}
)


def check_relationship_name(purpose: str) -> None:
    """Reject a relationship name that collides with a document field.

    Raises:
        DIDDocumentError: If ``purpose`` is empty or a reserved key.
    """
    if not purpose or purpose in RESERVED_KEYS:
        raise DIDDocumentError(f"Invalid verification relationship name: {purpose!r}")


@dataclass
class VerificationMethod:
    """DID Document verification method."""

    id: str
    type: str
    controller: str
    public_key: bytes = b""

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the JSON form used in a DID Document."""
        return {
            "id": self.id,
            "type": self.type,
            "controller": self.controller,
            "publicKeyHex": self.public_key.hex(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> VerificationMethod:
        """Create a VerificationMethod from its JSON form.

        Raises:
            DIDDocumentError: If the entry is not an object or the key is not hex.
        """
        if not isinstance(data, dict):
            raise DIDDocumentError(f"Invalid verificationMethod entry: {data!r}")
        try:
            public_key = bytes.fromhex(data.get("publicKeyHex", ""))
        except (TypeError, ValueError) as e:
            raise DIDDocumentError(
                f"Invalid publicKeyHex in verification method {data.get('id', '')}"
            ) from e
        return cls(
            id=_as_str(data.get("id", ""), "verificationMethod id"),
            type=_as_str(data.get("type", ""), "verificationMethod type"),
            controller=_as_str(data.get("controller", ""), "verificationMethod controller"),
            public_key=public_key,
        )


@dataclass
class DIDDocument:
    """W3C DID Document."""

    id: str
    controller: str = ""
    context: str = DID_CONTEXT
    verification_methods: list[VerificationMethod] = field(default_factory=list)
    verification_relations: dict[str, list[str]] = field(default_factory=dict)
    service_endpoints: dict[str, str] = field(default_factory=dict)

    def get_verification_method(self, method_id: str) -> VerificationMethod | None:
        """Get a verification method by ID."""
        for vm in self.verification_methods:
            if vm.id == method_id:
                return vm
        return None

    def copy(self) -> DIDDocument:
        """Return a deep copy sharing no mutable state with this document."""
        return copy.deepcopy(self)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a W3C-style JSON mapping.

        Each verification relationship becomes a top-level array.

        Raises:
            DIDDocumentError: If a relationship name is a reserved key.
        """
        data: dict[str, Any] = {"@context": self.context, "id": self.id}
        if self.controller:
            data["controller"] = self.controller
        data["verificationMethod"] = [vm.to_dict() for vm in self.verification_methods]
        for purpose, method_ids in self.verification_relations.items():
            check_relationship_name(purpose)
            data[purpose] = list(method_ids)
        if self.service_endpoints:
            data["service"] = [
                {"id": f"{self.id}#{name}", "type": "LinkedDomains", "serviceEndpoint": uri}
                for name, uri in self.service_endpoints.items()
            ]
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DIDDocument:
        """Parse a DID Document from JSON.

        Every list-valued key outside the reserved document fields is read
        as a verification relationship.

        Args:
            data: The raw JSON data.

        Returns:
            Parsed DIDDocument.

        Raises:
            DIDDocumentError: If the document is invalid.
        """
        if not isinstance(data, dict):
            raise DIDDocumentError("DID Document must be a JSON object")

        doc_id = data.get("id")
        if not doc_id or not isinstance(doc_id, str):
            raise DIDDocumentError("DID Document is missing an id")

        context = data.get("@context", DID_CONTEXT)
        # A list context keeps only its base entry.
        if isinstance(context, list):
            context = context[0] if context else DID_CONTEXT
        context = _as_str(context, "@context")

        controller = _as_str(data.get("controller", ""), "controller")

        verification_methods = [
            VerificationMethod.from_dict(vm_data)
            for vm_data in _as_list(data.get("verificationMethod", []), "verificationMethod")
        ]

        relations: dict[str, list[str]] = {}
        for purpose, value in data.items():
            if purpose in RESERVED_KEYS:
                continue
            if purpose in RELATIONSHIPS or isinstance(value, list):
                relations[purpose] = _parse_verification_relationship(
                    _as_list(value, purpose)
                )

        endpoints: dict[str, str] = {}
        for service in _as_list(data.get("service", []), "service"):
            if not isinstance(service, dict) or "serviceEndpoint" not in service:
                raise DIDDocumentError(f"Invalid service entry: {service!r}")
            name = _as_str(service.get("id", ""), "service id").split("#")[-1]
            endpoints[name] = _as_str(service["serviceEndpoint"], "serviceEndpoint")

        return cls(
            id=doc_id,
            controller=controller,
            context=context,
            verification_methods=verification_methods,
            verification_relations=relations,
            service_endpoints=endpoints,
        )


def _as_list(value: Any, name: str) -> list[Any]:
    if not isinstance(value, list):
        raise DIDDocumentError(f"{name} must be a list")
    return value


def _as_str(value: Any, name: str) -> str:
    if not isinstance(value, str):
        raise DIDDocumentError(f"{name} must be a string")
    return value


def _parse_verification_relationship(items: list[Any]) -> list[str]:
    """Parse a verification relationship array.

    Items can be either strings (references) or objects (embedded methods).
    Only the ID references are kept.
    """
    result: list[str] = []
    for item in items:
        if isinstance(item, str):
            result.append(item)
        elif isinstance(item, dict) and "id" in item:
            result.append(item["id"])
    return result
