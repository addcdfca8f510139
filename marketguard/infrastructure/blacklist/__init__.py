"""Blacklist gate infrastructure."""

from marketguard.infrastructure.blacklist.blacklist_gate import BlacklistGate

__all__ = ["BlacklistGate"]
