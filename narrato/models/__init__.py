"""Data models for Narrato."""
