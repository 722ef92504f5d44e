"""Core infrastructure: paths, environment and configuration."""
