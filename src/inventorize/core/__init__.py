"""Core infrastructure: errors, logging and application settings."""
