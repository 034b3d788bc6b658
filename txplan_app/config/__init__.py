"""
Configuration module.

Frozen dataclass defaults, YAML-backed overrides, and validation.
"""
