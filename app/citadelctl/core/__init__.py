"""Core infrastructure: paths, settings, game discovery and shared errors."""
