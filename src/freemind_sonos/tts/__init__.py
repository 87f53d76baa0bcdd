"""Remote text-to-speech (VoiceRSS) and the texts that get spoken."""
