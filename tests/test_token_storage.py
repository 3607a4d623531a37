"""
Tests for token storage.
"""

from orestes.token_storage import MemoryTokenStorage, TokenStorage


class TestMemoryTokenStorage:
    """Tests for MemoryTokenStorage."""

    def test_implements_protocol(self):
        """MemoryTokenStorage satisfies the TokenStorage protocol."""
        assert isinstance(MemoryTokenStorage(), TokenStorage)

    def test_initial_token(self):
        """A token can be given on creation."""
        assert MemoryTokenStorage().token is None
        assert MemoryTokenStorage("abc").token == "abc"

    def test_update(self):
        """Updates replace the token, empty tokens clear it."""
        storage = MemoryTokenStorage("old")

        storage.update("new")
        assert storage.token == "new"

        storage.update("")
        assert storage.token is None

    def test_sign_path_without_token(self):
        """Paths are unchanged without a token."""
        assert MemoryTokenStorage().sign_path("/v1/connect") == "/v1/connect"

    def test_sign_path(self):
        """The token is appended as an encoded BAT query parameter."""
        storage = MemoryTokenStorage("a/b+c")

        assert storage.sign_path("/v1/connect") == "/v1/connect?BAT=a%2Fb%2Bc"
        assert storage.sign_path("/v1/file?x=1") == "/v1/file?x=1&BAT=a%2Fb%2Bc"

    def test_shared_between_messages(self, get_object):
        """All messages referencing a storage see its current token."""
        storage = MemoryTokenStorage()
        first, second = get_object("Person", "1"), get_object("Person", "2")
        first.token_storage = storage
        second.token_storage = storage

        storage.update("tok")

        assert first.token_storage.token == second.token_storage.token == "tok"

    def test_repr_hides_token(self):
        """The token itself never shows up in the representation."""
        assert "secret" not in repr(MemoryTokenStorage("secret"))
