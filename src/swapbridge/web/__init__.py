"""Web boundary layer for quote and metadata endpoints.

This layer turns HTTP requests into routing engine calls. It CAN import from:
- routing/ (route resolution, no execution)
- chains / tokens (static metadata)
- config (settings)

Nothing in this layer holds keys or signs transactions.
"""

__all__ = [
    "contracts",
    "services",
    "controllers",
]
