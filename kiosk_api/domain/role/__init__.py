"""
Role bounded context: domain layer.
"""
