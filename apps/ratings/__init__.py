"""Ratings between the parties of a completed exchange."""
