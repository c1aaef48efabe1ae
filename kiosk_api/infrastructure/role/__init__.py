"""
Infrastructure adapters for the role bounded context.

ORM models and the repository adapter implementing the domain port.
"""
