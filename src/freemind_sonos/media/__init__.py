"""Music source (Jellyfin)."""
