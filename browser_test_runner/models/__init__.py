"""Data models shared across the runner."""
