"""
TrafficLens – API Routes (FastAPI)
====================================
Endpoints REST de ingesta y del dashboard.

Endpoints disponibles:
  POST /api/analytics/track               → registrar page view
  GET  /api/analytics/overview            → 4 métricas {value, change}
  GET  /api/analytics/visitors-over-time  → serie por día/semana/mes
  GET  /api/analytics/geography           → visitantes por país
  GET  /api/analytics/traffic-sources     → visitantes por referrer
  GET  /api/analytics/popular-pages       → top N páginas
  GET  /api/analytics/devices             → visitantes por device
  GET  /api/analytics/compare             → dos rangos arbitrarios
  GET  /api/health                        → health check

Todos los GET de analítica aceptan startDate/endDate (ISO-8601). Si falta
alguno se usa la ventana de los últimos `default_range_days` días.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, HTTPException, Query, status

from trafficlens.domain.exceptions.domain_errors import DomainError, InvalidDateRangeError
from trafficlens.domain.value_objects.date_range import DateRange
from trafficlens.domain.value_objects.interval import Interval
from trafficlens.presentation.api.schemas import (
    HealthResponse,
    TrackPageViewRequest,
    TrackPageViewResponse,
)
from trafficlens.shared.logging.logger import get_logger

logger = get_logger("api.routes")

router = APIRouter()

# Contenedor inyectado desde main.py
_container = None


def init_routes(container) -> None:
    """Inyectar el contenedor de dependencias al arrancar."""
    global _container
    _container = container


def _require_container():
    if _container is None:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Server not ready")
    return _container


# ─── Parsing de parámetros ─────────────────────────────────────────────

def parse_timestamp(value: str) -> datetime:
    """ISO-8601 → datetime. Acepta el sufijo 'Z' de toISOString()."""
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError as exc:
        raise InvalidDateRangeError("Invalid date format", value=value) from exc


def resolve_range(
    start_date: Optional[str],
    end_date: Optional[str],
    default_days: int,
    now: Optional[datetime] = None,
) -> DateRange:
    """Rango explícito o ventana de los últimos `default_days` días."""
    if not start_date or not end_date:
        return DateRange.trailing(default_days, now=now)
    return DateRange(start=parse_timestamp(start_date), end=parse_timestamp(end_date))


def _range_from_query(start_date: Optional[str], end_date: Optional[str]) -> DateRange:
    container = _require_container()
    return resolve_range(start_date, end_date, container.settings.default_range_days)


# ─── Ingesta ───────────────────────────────────────────────────────────

@router.post(
    "/api/analytics/track",
    status_code=status.HTTP_201_CREATED,
    response_model=TrackPageViewResponse,
)
async def track_page_view(body: Optional[TrackPageViewRequest] = None) -> dict:
    """Registrar una page view enviada por el script de tracking."""
    container = _require_container()
    request = (body or TrackPageViewRequest()).to_dto()
    try:
        await container.track_page_view_usecase.execute(request)
    except DomainError:
        raise
    except Exception:
        logger.exception("Error registrando page view")
        raise
    return {"message": "Page view recorded"}


# ─── Dashboard ─────────────────────────────────────────────────────────

@router.get("/api/analytics/overview")
async def get_overview(
    start_date: Optional[str] = Query(default=None, alias="startDate"),
    end_date: Optional[str] = Query(default=None, alias="endDate"),
) -> dict:
    """Métricas de cabecera con variación frente al periodo anterior."""
    date_range = _range_from_query(start_date, end_date)
    try:
        overview = await _container.get_analytics_usecase().get_overview(date_range)
    except Exception:
        logger.exception("Error calculando overview")
        raise
    return overview.to_dict()


@router.get("/api/analytics/visitors-over-time")
async def get_visitors_over_time(
    start_date: Optional[str] = Query(default=None, alias="startDate"),
    end_date: Optional[str] = Query(default=None, alias="endDate"),
    interval: Optional[str] = Query(default=None, description="day | week | month"),
) -> dict:
    """Visitantes únicos y page views por bucket (día por defecto)."""
    date_range = _range_from_query(start_date, end_date)
    try:
        series = await _container.get_analytics_usecase().get_visitors_over_time(
            date_range, Interval.parse(interval),
        )
    except Exception:
        logger.exception("Error calculando serie temporal")
        raise
    return series.to_dict()


@router.get("/api/analytics/geography")
async def get_geography(
    start_date: Optional[str] = Query(default=None, alias="startDate"),
    end_date: Optional[str] = Query(default=None, alias="endDate"),
) -> list:
    """Visitantes por país (atribución: primer país no nulo)."""
    date_range = _range_from_query(start_date, end_date)
    try:
        countries = await _container.get_analytics_usecase().get_geography(date_range)
    except Exception:
        logger.exception("Error calculando geografía")
        raise
    return [c.to_dict() for c in countries]


@router.get("/api/analytics/traffic-sources")
async def get_traffic_sources(
    start_date: Optional[str] = Query(default=None, alias="startDate"),
    end_date: Optional[str] = Query(default=None, alias="endDate"),
) -> list:
    """Visitantes por fuente de tráfico, con nombre canónico e icono."""
    date_range = _range_from_query(start_date, end_date)
    try:
        sources = await _container.get_analytics_usecase().get_traffic_sources(date_range)
    except Exception:
        logger.exception("Error calculando fuentes de tráfico")
        raise
    return [s.to_dict() for s in sources]


@router.get("/api/analytics/popular-pages")
async def get_popular_pages(
    start_date: Optional[str] = Query(default=None, alias="startDate"),
    end_date: Optional[str] = Query(default=None, alias="endDate"),
    limit: Optional[int] = Query(default=None, description="Máximo de páginas"),
) -> list:
    """Top páginas por vistas con tiempo medio y bounce rate."""
    date_range = _range_from_query(start_date, end_date)
    if limit is None:
        limit = _container.settings.popular_pages_default_limit
    try:
        pages = await _container.get_analytics_usecase().get_popular_pages(date_range, limit)
    except Exception:
        logger.exception("Error calculando páginas populares")
        raise
    return [p.to_dict() for p in pages]


@router.get("/api/analytics/devices")
async def get_devices(
    start_date: Optional[str] = Query(default=None, alias="startDate"),
    end_date: Optional[str] = Query(default=None, alias="endDate"),
) -> list:
    """Visitantes por tipo de device."""
    date_range = _range_from_query(start_date, end_date)
    try:
        devices = await _container.get_analytics_usecase().get_devices(date_range)
    except Exception:
        logger.exception("Error calculando devices")
        raise
    return [d.to_dict() for d in devices]


@router.get("/api/analytics/compare")
async def compare_ranges(
    start_date: Optional[str] = Query(default=None, alias="startDate"),
    end_date: Optional[str] = Query(default=None, alias="endDate"),
    compare_start_date: Optional[str] = Query(default=None, alias="compareStartDate"),
    compare_end_date: Optional[str] = Query(default=None, alias="compareEndDate"),
) -> dict:
    """
    Compara dos rangos arbitrarios.

    Sin compareStartDate/compareEndDate se compara contra el periodo
    anterior de igual longitud.
    """
    date_range = _range_from_query(start_date, end_date)
    comparison_range = None
    if compare_start_date and compare_end_date:
        comparison_range = DateRange(
            start=parse_timestamp(compare_start_date),
            end=parse_timestamp(compare_end_date),
        )
    try:
        rows = await _container.get_analytics_usecase().compare(date_range, comparison_range)
    except Exception:
        logger.exception("Error comparando rangos")
        raise
    return {name: row.to_dict() for name, row in rows.items()}


# ─── Estado ────────────────────────────────────────────────────────────

@router.get("/api/health", response_model=HealthResponse)
async def health_check() -> dict:
    """Health check para monitoreo."""
    container = _require_container()
    store = container.event_store
    return {
        "status": "ok",
        "service": container.settings.app_name.lower(),
        "pageViews": await store.count_page_views(),
        "visitors": await store.count_visitors(),
    }
