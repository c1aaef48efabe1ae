"""
Interfaces layer package.

Contains FastAPI routers, Pydantic request/response schemas
and the router mounting logic. No business logic belongs here.
Routes call use cases and fill the request context.
"""
