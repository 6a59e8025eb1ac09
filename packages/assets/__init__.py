"""Bundled gif assets and their catalog."""
