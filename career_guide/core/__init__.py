"""
Core module - settings, logging, errors, caching and request identity.
"""
