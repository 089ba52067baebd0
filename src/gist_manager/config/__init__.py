"""
Configuration package for Gist Manager.

This package contains configuration management including settings,
.env discovery and hierarchical settings files.
"""

__all__ = ["settings", "env_loader", "hierarchical"]
