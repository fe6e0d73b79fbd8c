"""Tests for the verifiable data registry and resolver."""

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from did_sim import DIDDocument, DIDResolver, VerifiableDataRegistry, VerificationMethod


def make_document(did: str, tag: str = "a") -> DIDDocument:
    """Build a document whose every field carries ``tag``."""
    return DIDDocument(
        id=did,
        controller=f"controller-{tag}",
        verification_methods=[
            VerificationMethod(
                id=f"key-{tag}",
                type="EcdsaSecp256r1VerificationKey2019",
                controller=f"controller-{tag}",
                public_key=tag.encode() * 8,
            )
        ],
        verification_relations={"authentication": [f"key-{tag}"]},
        service_endpoints={"profile": f"https://profile.example.com/{tag}"},
    )


@pytest.fixture
def registry():
    return VerifiableDataRegistry()


@pytest.fixture
def resolver(registry):
    return DIDResolver(registry)


class TestVerifiableDataRegistry:
    """Tests for registration and lookup."""

    def test_lookup_unknown(self, registry):
        """Test that an unregistered DID is not found."""
        assert registry.lookup("did:example:nobody") is None

    def test_register_and_lookup(self, registry):
        """Test that a registered document is returned unchanged."""
        doc = make_document("did:example:alice")
        registry.register(doc)

        assert registry.lookup("did:example:alice") == doc
        assert "did:example:alice" in registry
        assert len(registry) == 1

    def test_overwrite_last_write_wins(self, registry):
        """Test that re-registering a DID replaces the previous document."""
        registry.register(make_document("did:example:alice", "a"))
        registry.register(make_document("did:example:alice", "b"))

        assert registry.lookup("did:example:alice") == make_document("did:example:alice", "b")
        assert len(registry) == 1

    def test_keys_are_independent(self, registry):
        """Test that registering one DID does not affect another."""
        registry.register(make_document("did:example:alice", "a"))
        registry.register(make_document("did:example:bob", "b"))
        registry.register(make_document("did:example:alice", "c"))

        assert registry.lookup("did:example:bob") == make_document("did:example:bob", "b")
        assert registry.identifiers() == ["did:example:alice", "did:example:bob"]

    def test_register_stores_a_copy(self, registry):
        """Test that mutating the submitted document does not change the registry."""
        doc = make_document("did:example:alice")
        registry.register(doc)

        doc.controller = "mallory"
        doc.service_endpoints["profile"] = "https://evil.example.com"
        doc.verification_relations["authentication"].append("key-x")

        stored = registry.lookup("did:example:alice")
        assert stored == make_document("did:example:alice")

    def test_lookup_returns_a_copy(self, registry):
        """Test that mutating a looked-up document does not change the registry."""
        registry.register(make_document("did:example:alice"))

        first = registry.lookup("did:example:alice")
        first.verification_methods.clear()

        assert len(registry.lookup("did:example:alice").verification_methods) == 1

    def test_no_shared_default_state(self):
        """Test that separate registries do not share records."""
        first = VerifiableDataRegistry()
        second = VerifiableDataRegistry()
        first.register(make_document("did:example:alice"))

        assert second.lookup("did:example:alice") is None

    def test_concurrent_registration(self, registry):
        """Test that concurrent registrations of distinct DIDs are all kept."""
        dids = [f"did:example:subject{i}" for i in range(200)]

        with ThreadPoolExecutor(max_workers=16) as pool:
            list(pool.map(lambda did: registry.register(make_document(did)), dids))

        assert len(registry) == len(dids)
        for did in dids:
            assert registry.lookup(did) == make_document(did)

    def test_concurrent_read_write_consistency(self, registry):
        """Test that readers only ever see a whole old or whole new document."""
        did = "did:example:alice"
        old = make_document(did, "a")
        new = make_document(did, "b")
        registry.register(old)

        stop = threading.Event()
        mixed: list[DIDDocument] = []

        def writer():
            for i in range(2000):
                registry.register(new if i % 2 else old)
            stop.set()

        def reader():
            while not stop.is_set():
                doc = registry.lookup(did)
                if doc != old and doc != new:
                    mixed.append(doc)

        threads = [threading.Thread(target=reader) for _ in range(4)]
        threads.append(threading.Thread(target=writer))
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert mixed == []


class TestDIDResolver:
    """Tests for DID resolution."""

    def test_resolve_not_found(self, resolver):
        """Test resolving an unregistered DID."""
        assert resolver.resolve("did:example:nobody") is None

    def test_resolve_round_trip(self, registry, resolver):
        """Test that a registered document resolves to an equal document."""
        doc = make_document("did:example:alice")
        registry.register(doc)

        assert resolver.resolve("did:example:alice") == doc

    def test_resolve_identifier_with_hash(self, registry, resolver):
        """Test that an identifier containing '#' resolves as registered."""
        doc = make_document("did:example:alice#key-a")
        registry.register(doc)

        assert resolver.resolve("did:example:alice#key-a") == doc

    def test_resolve_unregistered_identifier_with_hash(self, registry, resolver):
        """Test that an unregistered '#' identifier is not found."""
        registry.register(make_document("did:example:alice"))

        assert resolver.resolve("did:example:alice#nope") is None

    def test_resolve_sees_later_registration(self, registry, resolver):
        """Test that the resolver reads the shared registry, not a snapshot."""
        assert resolver.resolve("did:example:alice") is None

        registry.register(make_document("did:example:alice", "a"))
        registry.register(make_document("did:example:alice", "b"))

        assert resolver.resolve("did:example:alice") == make_document("did:example:alice", "b")

    def test_resolvers_share_registry(self, registry):
        """Test that two resolvers over one registry agree."""
        first = DIDResolver(registry)
        second = DIDResolver(registry)
        registry.register(make_document("did:example:alice"))

        assert first.resolve("did:example:alice") == second.resolve("did:example:alice")
