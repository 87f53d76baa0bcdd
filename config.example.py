# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Do NOT commit real secrets. Put them in .env (local, gitignored).

This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # App / logging
    "FMSONOS_USERNAME": "Name used when addressing you (default: there).",
    "FMSONOS_LOG_LEVEL": "Console logging level (default: INFO; --debug overrides).",
    "FMSONOS_DATA_DIR": "Local data directory for the log file (default: .local/freemind_sonos).",
    # Local media server
    "FMSONOS_MEDIA_DIR": "Directory the speech file is written to (must exist, default: ./media).",
    "FMSONOS_LOCAL_SERVER": "URL under which a web server exposes FMSONOS_MEDIA_DIR, with trailing slash.",
    # TTS (VoiceRSS)
    "FMSONOS_TTS_API_KEY": "VoiceRSS API key.",
    "FMSONOS_TTS_LANGUAGE": "VoiceRSS language (default: en-gb).",
    "FMSONOS_TTS_VOICE": "VoiceRSS voice (default: Nancy).",
    # Freemind
    "FMSONOS_FREEMIND_SERVER": "Freemind API base URL.",
    "FMSONOS_FREEMIND_USERNAME": "Freemind user.",
    "FMSONOS_FREEMIND_SECRET": "Freemind token or password.",
    "FMSONOS_FREEMIND_METHOD": "token | password (default: password).",
    # Jellyfin
    "FMSONOS_JELLYFIN_SERVER": "Jellyfin base URL.",
    "FMSONOS_JELLYFIN_API_KEY": "Jellyfin API key.",
    "FMSONOS_JELLYFIN_USER_ID": "Optional Jellyfin user id to pick tracks from.",
    "FMSONOS_JELLYFIN_STREAM_BASE": "Optional base URL the speaker uses to stream (default: server).",
    # Speaker
    "FMSONOS_SPEAKER_IP": "IPv4 address of the Sonos speaker.",
    "FMSONOS_SPEAKER_VOLUME": "Volume 0-100 (default: 10).",
    "FMSONOS_SPEAKER_CROSSFADE": "true/false (default: false).",
    "FMSONOS_SPEAKER_SHUFFLE": "true/false (default: false).",
    "FMSONOS_SPEAKER_REPEAT": "true/false (default: false).",
    "FMSONOS_SPEAKER_LOUDNESS": "true/false (default: false).",
    "FMSONOS_SPEAKER_TREBLE": "-10..10 (default: 5).",
    "FMSONOS_SPEAKER_BASS": "-10..10 (default: 5).",
    # Pipeline timing
    "FMSONOS_MUSIC_LEAD_SECONDS": "How long the music plays before the digest (default: 120).",
    "FMSONOS_RESUME_MUSIC": "Resume the track after the digest (true/false, default: false).",
    "FMSONOS_RESUME_OFFSET_SECONDS": "Where to resume the track, in seconds (default: 120).",
    "FMSONOS_ALERT_WINDOW_MINUTES": "Default window of the 'alert' command (default: 30).",
}
