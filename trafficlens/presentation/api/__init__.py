"""API REST."""

from trafficlens.presentation.api.routes import init_routes, router

__all__ = ["router", "init_routes"]
