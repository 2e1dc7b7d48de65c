"""Shared helpers for logging, HTTP and error types."""
