"""
TrafficLens – Main Application Entry Point
============================================
Servicio de analítica web: ingesta de page views + métricas del dashboard.

ARQUITECTURA DE ARRANQUE:
  1. Configurar logging
  2. Crear el contenedor de dependencias (Settings → Event Store → use cases)
  3. FastAPI lifespan startup:
     a. Inicializar base de datos (solo store_backend=sql)
     b. Inyectar el contenedor al router
     c. Poblar datos demo (opcional)
  4. FastAPI lifespan shutdown:
     a. Cerrar el pool de conexiones

FLUJO DE DATOS:
  Script de tracking → POST /api/analytics/track → TrackPageViewUseCase
       → IEventStore (append-only) + upsert de visitante
  Dashboard → GET /api/analytics/* → AnalyticsQueryUseCase
       → MetricContext (una lectura por rango)
       → agregadores / SeriesBuilder / comparación → JSON
  uvicorn trafficlens.main:app --reload --host 0.0.0.0 --port 8000
"""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from trafficlens.container import Container, init_container
from trafficlens.domain.exceptions.domain_errors import DomainError
from trafficlens.presentation.api.routes import init_routes, router
from trafficlens.shared.config.settings import settings
from trafficlens.shared.logging.logger import get_logger, setup_logging

# ─── Logging ────────────────────────────────────────────────────────────
setup_logging(settings.log_level)
logger = get_logger("main")


def create_app(container: Container) -> FastAPI:
    """Construye la app FastAPI alrededor de un contenedor concreto."""
    app_settings = container.settings

    # ─── FastAPI Lifespan ───────────────────────────────────────────────
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup/shutdown lifecycle de la aplicación."""
        logger.info("=" * 60)
        logger.info("  %s - Web Analytics", app_settings.app_name)
        logger.info("  Event Store: %s", app_settings.store_backend)
        logger.info("  Rango por defecto: últimos %d días", app_settings.default_range_days)
        logger.info("  Popular pages: top %d", app_settings.popular_pages_default_limit)
        logger.info("=" * 60)

        db_manager = None
        if app_settings.store_backend == "sql":
            from trafficlens.infrastructure.persistence.database import get_db_manager
            db_manager = get_db_manager(app_settings)
            await db_manager.initialize()
            logger.info("  Database: conectada")
        else:
            logger.info("  Database: deshabilitada (store en memoria)")

        # Inyectar dependencias al router (desde container)
        init_routes(container)

        if app_settings.seed_demo_data:
            from trafficlens.infrastructure.seed.demo_data import seed_demo_data
            await seed_demo_data(
                container.event_store,
                visitors=app_settings.seed_visitors,
                seed=app_settings.seed_random_seed,
            )

        logger.info("✓ Todos los componentes iniciados correctamente")

        yield  # ← La app está corriendo aquí

        # ── SHUTDOWN ──
        logger.info("Iniciando shutdown...")
        if db_manager is not None:
            await db_manager.close()
            logger.info("  Database: Conexión cerrada")
        logger.info("✓ Shutdown completo")

    app = FastAPI(
        title="TrafficLens",
        description="Motor de agregación de analítica web: tracking de page views y métricas de tráfico",
        version="0.1.0",
        lifespan=lifespan,
    )

    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
        logger.warning("%s %s → %s: %s", request.method, request.url.path, exc.code, exc.message)
        return JSONResponse(status_code=400, content=exc.to_dict())

    # CORS: el script de tracking se sirve desde otros orígenes
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Rutas
    app.include_router(router)
    return app


# ─── Contenedor de Dependencias ─────────────────────────────────────────
container = init_container(settings)
app = create_app(container)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("trafficlens.main:app", host=settings.host, port=settings.port, reload=settings.debug)
