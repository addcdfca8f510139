"""Test suite for MarketGuard.

- unit/: Unit tests with in-memory or mocked collaborators
- utils/: Synthetic history provider and blacklist store
"""
