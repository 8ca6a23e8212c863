"""Shared helpers used across ligrowth packages."""
