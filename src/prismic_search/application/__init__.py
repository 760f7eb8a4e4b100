"""Application layer: search use cases and saved-query persistence."""
