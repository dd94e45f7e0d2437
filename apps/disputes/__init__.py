"""Disputes on exchanges that went wrong."""
