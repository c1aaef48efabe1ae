"""
Security package: headers middleware, rate limiting and router guards.
"""
