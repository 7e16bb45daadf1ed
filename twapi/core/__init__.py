"""Core building blocks: OAuth signing, transport and media upload."""
