"""Infrastructure Layer: persistence gateways and cross-cutting concerns.

Invariants:
    - Backend exceptions never escape a gateway untranslated: everything
      surfaces as core.errors.GatewayError or a subclass

Design Decisions:
    - Two gateways behind one Protocol: SQLAlchemy for deployments, in-memory
      for local runs without a database
"""
