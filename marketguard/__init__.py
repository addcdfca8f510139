"""MarketGuard: rate limiting and order fraud screening for marketplace pipelines.

Layers:
    - core: Result types, error base classes, configuration, DI container
    - domain: Entities, value objects, enums, errors and protocols (ports)
    - infrastructure: Adapters implementing the domain protocols
    - application: Security gate service wiring the order screening flow
"""

__version__ = "0.1.0"
