"""Configuration: paths, sub-config models, and settings."""
