"""
StockTrader Account: account microservice for the StockTrader sample.

Application package root. This is a small service using
hexagonal architecture (ports & adapters) with domain-driven design.

Bounded contexts:
    - account: Balances, commissions, loyalty tiers, sentiment and free trades.

Layers:
    - domain: Pure business logic, entities, ports (ABCs), errors.
    - application: Use cases, DTOs, orchestration.
    - infrastructure: Adapters (SQL store, HTTP clients, notifiers) implementing domain ports.
    - interfaces: FastAPI routers, Pydantic schemas.
    - shared: Cross-cutting concerns (errors, security, logging).
"""
