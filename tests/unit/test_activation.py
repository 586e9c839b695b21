"""Unit tests for the activation registry."""

import threading

import pytest


class TestActivationRegistry:
    """Tests for install/clear/current_keys."""

    def test_starts_empty(self, registry):
        """A new registry has no active keys."""
        assert registry.current_keys() is None
        assert not registry.is_active

    def test_install(self, registry):
        """Installed keys are visible to readers."""
        from workspace_vault.encryption import KeyPair

        registry.install(b"wk", b"ck")

        assert registry.current_keys() == KeyPair(workspace_key=b"wk", config_key=b"ck")
        assert registry.is_active

    def test_install_overwrites(self, registry):
        """A later install replaces the active pair."""
        registry.install(b"wk1", b"ck1")
        registry.install(b"wk2", b"ck2")

        keys = registry.current_keys()
        assert keys.workspace_key == b"wk2"
        assert keys.config_key == b"ck2"

    def test_install_idempotent(self, registry):
        """Installing the same pair twice looks the same as once."""
        registry.install(b"wk", b"ck")
        first = registry.current_keys()
        registry.install(b"wk", b"ck")

        assert registry.current_keys() == first

    def test_clear(self, registry):
        """Clear drops the active pair."""
        registry.install(b"wk", b"ck")
        registry.clear()

        assert registry.current_keys() is None

    def test_clear_when_empty(self, registry):
        """Clear is safe with nothing active, and idempotent."""
        registry.clear()
        registry.clear()

        assert registry.current_keys() is None

    def test_require_keys(self, registry):
        """require_keys raises when locked and returns keys when active."""
        from workspace_vault.encryption import EncryptionLockedError

        with pytest.raises(EncryptionLockedError):
            registry.require_keys()

        registry.install(b"wk", b"ck")
        assert registry.require_keys().workspace_key == b"wk"

    def test_registries_are_independent(self, registry):
        """Separate instances do not share state."""
        from workspace_vault.encryption import ActivationRegistry

        other = ActivationRegistry()
        registry.install(b"wk", b"ck")

        assert other.current_keys() is None

    def test_concurrent_readers_see_whole_pairs(self, registry):
        """Readers never observe a pair mixing two installs."""
        seen = []
        stop = threading.Event()

        def reader():
            while not stop.is_set():
                keys = registry.current_keys()
                if keys is not None:
                    seen.append((keys.workspace_key, keys.config_key))

        thread = threading.Thread(target=reader)
        thread.start()
        for i in range(200):
            registry.install(b"wk%d" % i, b"ck%d" % i)
        stop.set()
        thread.join()

        for workspace_key, config_key in seen:
            assert workspace_key[2:] == config_key[2:]


class TestProcessRegistry:
    """Tests for the process-wide registry helpers."""

    def test_get_instance_is_singleton(self):
        from workspace_vault.encryption.activation import ActivationRegistry

        assert ActivationRegistry.get_instance() is ActivationRegistry.get_instance()

    def test_reset_instance_clears_keys(self):
        """Reset drops keys held by the old instance."""
        from workspace_vault.encryption.activation import ActivationRegistry

        old = ActivationRegistry.get_instance()
        old.install(b"wk", b"ck")

        ActivationRegistry.reset_instance()

        assert old.current_keys() is None
        assert ActivationRegistry.get_instance() is not old

    def test_module_functions(self):
        """set/get/clear operate on the process-wide registry."""
        from workspace_vault.encryption import (
            clear_active_keys,
            get_activation_registry,
            get_active_keys,
            set_active_keys,
        )

        set_active_keys(b"wk", b"ck")
        assert get_activation_registry().is_active
        assert get_active_keys().config_key == b"ck"

        clear_active_keys()
        assert get_active_keys() is None
