"""Configuration, paths, theming and run gating for m2sweep."""
