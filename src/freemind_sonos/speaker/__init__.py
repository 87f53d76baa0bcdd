"""Sonos speaker control."""
