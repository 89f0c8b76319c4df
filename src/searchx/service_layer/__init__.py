"""Service layer: async orchestration over the synchronous engine."""

from searchx.service_layer.search_service import SearchService


__all__ = ["SearchService"]
