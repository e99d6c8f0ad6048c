"""Changelog synthesis engine."""
