"""Configuration — TOML discovery, typed settings, and logging setup."""
