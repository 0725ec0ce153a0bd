"""API Layer: FastAPI routers, dependencies, and global error handlers.

Invariants:
    - Routes hold no state; the gateway arrives through a dependency
"""
