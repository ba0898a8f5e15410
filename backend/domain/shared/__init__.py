"""Shared domain contracts."""
