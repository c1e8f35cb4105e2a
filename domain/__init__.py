"""
Domain layer - Pure business entities without infrastructure dependencies.

This package contains the entity types held by the repositories and the
schema helpers that describe their fields.
"""
