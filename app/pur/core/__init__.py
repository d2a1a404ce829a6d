"""Core package management: configuration, packages, repositories and lifecycle."""
