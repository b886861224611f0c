"""Infrastructure layer — SQLite key-value store, handler provider, launcher."""
