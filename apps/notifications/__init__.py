"""Notifications for request events."""
