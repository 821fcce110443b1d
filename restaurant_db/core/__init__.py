"""
Core utilities shared across the persistence layer.

This package hosts configuration, logging setup, the error taxonomy and the
type coercion helpers used by model validators.
"""
