"""Tests for StoreWithFallbacks."""

from unittest.mock import Mock

import pytest

from registry_credentials.credentials import (
    EMPTY_CREDENTIAL,
    Credential,
    CredentialError,
    NativeHelperError,
    StoreWithFallbacks,
    new_store_with_fallbacks,
)

X = Credential(username="x", password="x-pass")
Y = Credential(refresh_token="y-token")


def make_store(result=EMPTY_CREDENTIAL):
    """Create a mock store whose get returns or raises result."""
    store = Mock()
    if isinstance(result, Exception):
        store.get.side_effect = result
    else:
        store.get.return_value = result
    return store


class TestNewStoreWithFallbacks:
    """Test construction."""

    def test_no_fallbacks_returns_primary(self):
        """Test primary is returned unwrapped."""
        primary = make_store()

        assert new_store_with_fallbacks(primary) is primary

    def test_no_fallbacks_keeps_error_identity(self):
        """Test errors from an unwrapped primary are the primary's own."""
        error = NativeHelperError("down")
        primary = make_store(error)

        store = new_store_with_fallbacks(primary)

        with pytest.raises(NativeHelperError) as exc_info:
            store.get("registry.example.com")
        assert exc_info.value is error

    def test_with_fallbacks_wraps(self):
        """Test fallbacks produce a composite with primary first."""
        primary, fallback = make_store(), make_store()

        store = new_store_with_fallbacks(primary, fallback)

        assert isinstance(store, StoreWithFallbacks)
        assert store.stores == (primary, fallback)


class TestStoreWithFallbacksGet:
    """Test search semantics of get."""

    def test_returns_first_found(self):
        """Test search stops at the first non-empty credential."""
        b1, b2, b3 = make_store(), make_store(X), make_store(Y)
        store = new_store_with_fallbacks(b1, b2, b3)

        assert store.get("registry.example.com") == X
        b1.get.assert_called_once_with("registry.example.com")
        b2.get.assert_called_once_with("registry.example.com")
        b3.get.assert_not_called()

    def test_primary_hit_skips_fallbacks(self):
        """Test a primary hit never consults fallbacks."""
        b1, b2 = make_store(Y), make_store(X)
        store = new_store_with_fallbacks(b1, b2)

        assert store.get("registry.example.com") == Y
        b2.get.assert_not_called()

    def test_error_short_circuits(self):
        """Test an error stops the search and is raised."""
        error = CredentialError("backend failed")
        b1, b2 = make_store(error), make_store(X)
        store = new_store_with_fallbacks(b1, b2)

        with pytest.raises(CredentialError) as exc_info:
            store.get("registry.example.com")

        assert exc_info.value is error
        b2.get.assert_not_called()

    def test_error_after_miss_masks_later_stores(self):
        """Test an error in a fallback hides stores after it."""
        b1, b2, b3 = make_store(), make_store(NativeHelperError("down")), make_store(X)
        store = new_store_with_fallbacks(b1, b2, b3)

        with pytest.raises(NativeHelperError):
            store.get("registry.example.com")
        b3.get.assert_not_called()

    def test_all_empty(self):
        """Test exhausted search returns the empty credential."""
        stores = [make_store() for _ in range(3)]
        store = new_store_with_fallbacks(*stores)

        assert store.get("registry.example.com") == EMPTY_CREDENTIAL
        for s in stores:
            s.get.assert_called_once_with("registry.example.com")


class TestStoreWithFallbacksWrite:
    """Test put and delete only touch the primary."""

    @pytest.mark.parametrize("count", [2, 5])
    def test_put_targets_primary(self, count):
        """Test put goes to the primary only."""
        stores = [make_store() for _ in range(count)]
        store = new_store_with_fallbacks(*stores)

        store.put("registry.example.com", X)

        stores[0].put.assert_called_once_with("registry.example.com", X)
        for s in stores[1:]:
            s.put.assert_not_called()

    @pytest.mark.parametrize("count", [2, 5])
    def test_delete_targets_primary(self, count):
        """Test delete goes to the primary only."""
        stores = [make_store() for _ in range(count)]
        store = new_store_with_fallbacks(*stores)

        store.delete("registry.example.com")

        stores[0].delete.assert_called_once_with("registry.example.com")
        for s in stores[1:]:
            s.delete.assert_not_called()

    def test_put_error_propagates(self):
        """Test primary put errors are raised unchanged."""
        primary, fallback = make_store(), make_store()
        primary.put.side_effect = NativeHelperError("store failed")
        store = new_store_with_fallbacks(primary, fallback)

        with pytest.raises(NativeHelperError):
            store.put("registry.example.com", X)
        fallback.put.assert_not_called()
