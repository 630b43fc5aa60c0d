"""Bundled data files for m2sweep."""
