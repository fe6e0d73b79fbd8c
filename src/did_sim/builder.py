"""
DID Document construction for a subject and its controller key.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from did_sim.document import DIDDocument, VerificationMethod, check_relationship_name
from did_sim.keys import KEY_TYPE


def build_did(subject_id: str, method: str = "example") -> str:
    """Build a DID for a subject, e.g. ``did:example:subject1``."""
    return f"did:{method}:{subject_id}"


def build_document(
    subject_id: str,
    public_key: bytes,
    key_id: str = "key1",
    relations: Iterable[str] = ("authentication",),
    service_endpoints: Mapping[str, str] | None = None,
    method: str = "example",
) -> DIDDocument:
    """Assemble a DID Document for a subject.

    The subject controls the document and its single verification method.
    Every purpose in ``relations`` references that method.

    Args:
        subject_id: Method-specific identifier of the subject.
        public_key: Encoded public key of the controller.
        key_id: Identifier of the verification method.
        relations: Verification relationships the key is used for.
        service_endpoints: Endpoint name to URI mapping.
        method: DID method name.

    Returns:
        The assembled DIDDocument.

    Raises:
        DIDDocumentError: If a relation name collides with a document field.
    """
    relations = list(relations)
    for purpose in relations:
        check_relationship_name(purpose)

    verification_method = VerificationMethod(
        id=key_id,
        type=KEY_TYPE,
        controller=subject_id,
        public_key=public_key,
    )
    return DIDDocument(
        id=build_did(subject_id, method),
        controller=subject_id,
        verification_methods=[verification_method],
        verification_relations={purpose: [key_id] for purpose in relations},
        service_endpoints=dict(service_endpoints or {}),
    )


def parse_endpoint(value: str) -> tuple[str, str]:
    """Parse a ``name=uri`` service endpoint option.

    Raises:
        ValueError: If the value has no name or no URI.
    """
    name, sep, uri = value.partition("=")
    name, uri = name.strip(), uri.strip()
    if not sep or not name or not uri:
        raise ValueError(f"Invalid service endpoint {value!r}, expected NAME=URI")
    return name, uri
