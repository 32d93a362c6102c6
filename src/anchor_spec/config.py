"""
Global configuration for the shielded pool specification.

This module contains environment-specific settings that apply across all subspecs.
"""

import os

_SUPPORTED_ANCHOR_ENVS: list[str] = ["prod", "test"]

ANCHOR_ENV = os.environ.get("ANCHOR_ENV", "prod").lower()
"""
The environment flag ('prod' or 'test').

Selects the default pool preset: 'test' uses shallow trees so that
property tests can fill and wrap the root history quickly.
"""

if ANCHOR_ENV not in _SUPPORTED_ANCHOR_ENVS:
    raise ValueError(
        f"Invalid ANCHOR_ENV environment variable: '{ANCHOR_ENV}'. "
        f"Supported values: {_SUPPORTED_ANCHOR_ENVS}"
    )
