"""Test helpers: data factories and fixture pages."""
