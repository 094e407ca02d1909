"""Shared types and helpers for acmewell."""
