"""Packaged sample dataset."""
