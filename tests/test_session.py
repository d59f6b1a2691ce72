import unittest

from domain.models import Identity
from domain.session import CredentialStore, Session


class CredentialStoreTests(unittest.TestCase):
    def test_get_returns_what_was_set(self):
        store = CredentialStore()
        for token in ("abc", "eyJhbGciOiJIUzI1NiJ9.payload.sig", " spaced "):
            store.set(token)
            self.assertEqual(store.get(), token)

    def test_set_replaces_previous_token(self):
        store = CredentialStore()
        store.set("first")
        store.set("second")
        self.assertEqual(store.get(), "second")

    def test_starts_absent(self):
        store = CredentialStore()
        self.assertIsNone(store.get())
        self.assertFalse(store.is_present)

    def test_clear_is_idempotent(self):
        store = CredentialStore()
        store.clear()
        self.assertIsNone(store.get())

        store.set("token")
        store.clear()
        store.clear()
        self.assertIsNone(store.get())
        self.assertFalse(store.is_present)


class SessionTests(unittest.TestCase):
    def test_sessions_are_independent(self):
        first = Session()
        second = Session()
        first.credentials.set("token-1")
        first.identity = Identity(user_id=1, username="alice", token="token-1")

        self.assertIsNone(second.credentials.get())
        self.assertIsNone(second.identity)

    def test_identity_repr_hides_token(self):
        identity = Identity(user_id=1, username="alice", token="secret-token")
        self.assertNotIn("secret-token", repr(identity))


if __name__ == "__main__":
    unittest.main()
