"""Shared normalization helpers used across services and adapters."""
