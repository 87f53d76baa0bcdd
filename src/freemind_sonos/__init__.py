"""Announce the Freemind to-do digest on a Sonos speaker."""

__version__ = "0.1.0"
