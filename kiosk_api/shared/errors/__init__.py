"""
Shared error handling package.

Centralizes error classification and client-safe formatting so that
every failure reaches the client through the same envelope, with a
correlation code pointing at the full detail in the server logs.
"""
