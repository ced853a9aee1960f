"""Concrete entity integrations.

Importing an adapter module registers its resource classes with the default
registry.
"""
