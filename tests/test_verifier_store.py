"""
Testes para o armazenamento de PKCE verifiers
"""

from salesforce_connector.utils.verifier_store import (
    DEFAULT_VERIFIER_TTL,
    InMemoryVerifierStore,
    VerifierStore
)


class TestInMemoryVerifierStore:

    def test_default_ttl_is_thirty_minutes(self):
        assert DEFAULT_VERIFIER_TTL == 1800
        assert InMemoryVerifierStore().ttl_seconds == 1800

    def test_implements_interface(self):
        assert isinstance(InMemoryVerifierStore(), VerifierStore)

    def test_put_then_take(self, clock):
        store = InMemoryVerifierStore(clock=clock)
        store.put('state-1', 'verifier-1')

        clock.advance(60)
        assert store.take('state-1') == 'verifier-1'

    def test_take_is_one_time_use(self, clock):
        store = InMemoryVerifierStore(clock=clock)
        store.put('state-1', 'verifier-1')

        assert store.take('state-1') == 'verifier-1'
        assert store.take('state-1') is None

    def test_take_unknown_state(self, clock):
        store = InMemoryVerifierStore(clock=clock)
        assert store.take('missing') is None

    def test_take_after_ttl_returns_none_and_removes_entry(self, clock):
        store = InMemoryVerifierStore(ttl_seconds=1800, clock=clock)
        store.put('state-1', 'verifier-1')

        clock.advance(1801)
        assert store.take('state-1') is None
        assert len(store) == 0

    def test_entry_at_exact_ttl_still_valid(self, clock):
        store = InMemoryVerifierStore(ttl_seconds=1800, clock=clock)
        store.put('state-1', 'verifier-1')

        clock.advance(1800)
        assert store.take('state-1') == 'verifier-1'

    def test_put_sweeps_expired_entries(self, clock):
        store = InMemoryVerifierStore(ttl_seconds=1800, clock=clock)
        store.put('old-1', 'v1')
        store.put('old-2', 'v2')

        clock.advance(1000)
        store.put('recent', 'v3')

        clock.advance(900)
        store.put('new', 'v4')

        # old-1/old-2 passaram de 1800s; recent ainda não
        assert len(store) == 2
        assert store.take('old-1') is None
        assert store.take('recent') == 'v3'
        assert store.take('new') == 'v4'

    def test_put_overwrites_same_state(self, clock):
        store = InMemoryVerifierStore(clock=clock)
        store.put('state-1', 'first')
        store.put('state-1', 'second')

        assert len(store) == 1
        assert store.take('state-1') == 'second'
