"""
Kiosk API: role administration backend.

Application package root. A small modular monolith using
hexagonal architecture (ports & adapters).

Bounded contexts:
    - role: Listing and renaming user roles.

Layers:
    - domain: Pure business logic, entities, ports (ABCs), errors.
    - application: Use cases, DTOs, orchestration.
    - infrastructure: Adapters (SQLAlchemy models, repositories).
    - interfaces: FastAPI routers, Pydantic schemas, router mounting.
    - shared: Cross-cutting concerns (errors, response envelope, security, logging).
"""

__version__ = "0.1.0"
