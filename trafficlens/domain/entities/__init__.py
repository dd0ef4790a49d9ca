"""Domain entities."""
from trafficlens.domain.entities.page_view import DIRECT_SOURCE, NewPageView, PageViewEvent
from trafficlens.domain.entities.visitor import Visitor

__all__ = ["DIRECT_SOURCE", "NewPageView", "PageViewEvent", "Visitor"]
