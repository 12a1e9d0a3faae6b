"""
Tests for credential storage
"""

from infrastructure.storage import MemoryCredentialStore, SessionStateCredentialStore


class TestMemoryCredentialStore:
    """Process-local store"""

    def test_set_get_clear(self):
        store = MemoryCredentialStore()
        assert store.get_token() is None
        assert store.has_token() is False

        store.set_token("abc")
        assert store.get_token() == "abc"
        assert store.has_token() is True

        store.clear()
        assert store.get_token() is None

    def test_initial_token(self):
        assert MemoryCredentialStore(token="abc").get_token() == "abc"


class TestSessionStateCredentialStore:
    """Store backed by a browser session's state mapping"""

    def test_token_survives_new_instance_over_same_state(self):
        state = {}
        SessionStateCredentialStore(state).set_token("abc")

        assert SessionStateCredentialStore(state).get_token() == "abc"
        assert state == {"credential.token": "abc"}

    def test_sessions_do_not_share_tokens(self):
        alice_state, bob_state = {}, {}
        SessionStateCredentialStore(alice_state).set_token("alice-token")

        assert SessionStateCredentialStore(bob_state).get_token() is None

        SessionStateCredentialStore(bob_state).clear()
        assert SessionStateCredentialStore(alice_state).get_token() == "alice-token"

    def test_clear_leaves_other_state_alone(self):
        state = {"quiz.status": "idle", "credential.token": "abc"}
        store = SessionStateCredentialStore(state)

        store.clear()
        store.clear()

        assert store.get_token() is None
        assert state == {"quiz.status": "idle"}

    def test_custom_key(self):
        state = {}
        SessionStateCredentialStore(state, key="profile-a").set_token("aaa")

        assert SessionStateCredentialStore(state, key="profile-a").get_token() == "aaa"
        assert SessionStateCredentialStore(state).get_token() is None

    def test_non_string_value_means_no_token(self):
        assert SessionStateCredentialStore({"credential.token": 42}).get_token() is None
