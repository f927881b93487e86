"""LinkStash backend: URL metadata extraction, classification and link storage."""
