"""Application layer."""

from neofs_object.application.object_service import ObjectService

__all__ = ["ObjectService"]
