"""Shared building blocks used by every exchange app."""
