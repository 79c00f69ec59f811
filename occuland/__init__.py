"""Occuland source package.

This package contains:
- config: Configuration loading and management
- registry: Occuland asset registry, Land registry, roles and token core
"""

from __future__ import annotations

__all__: list[str] = []
