"""Interview answer evaluation, scoring and session persistence."""
