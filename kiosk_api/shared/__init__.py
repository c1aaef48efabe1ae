"""
Shared module package.

Contains cross-cutting concerns used across bounded contexts:
- Error types, error table and error normalization
- Response envelope (request context, success/error stages)
- Security middleware, guards and rate limiting
- Logging configuration and process hooks
"""
