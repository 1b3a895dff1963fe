from . import crud_controller, engines, entity_engine

__all__ = [
    "crud_controller",
    "engines",
    "entity_engine",
]
"""Service-layer query engines and controllers."""
