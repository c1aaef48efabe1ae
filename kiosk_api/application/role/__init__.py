"""
Application layer for the role bounded context.

Use cases coordinate domain entities and ports to fulfill
business operations. No framework or infrastructure imports allowed.
"""
