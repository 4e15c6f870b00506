"""Application-level logic that is independent of any single source."""
