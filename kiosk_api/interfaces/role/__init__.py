"""
Role resource: HTTP interface.

Exposes ``setup(kind)`` through ``router`` so the resource can be
mounted by the router table in the configuration.
"""
