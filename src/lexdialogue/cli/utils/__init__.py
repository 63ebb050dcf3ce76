"""Shared helpers for lexdialogue CLI commands."""
