"""Utilities used by the scripts."""
