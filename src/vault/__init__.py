"""Vault sync engine."""

from .sync import ConfigError, VaultSync, create_vault_sync

__all__ = ["VaultSync", "create_vault_sync", "ConfigError"]
