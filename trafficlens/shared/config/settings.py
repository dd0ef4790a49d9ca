"""
TrafficLens – Settings (Pydantic BaseSettings)
==============================================
Configuración centralizada cargada desde variables de entorno / .env.
Se usa pydantic-settings para validación estricta al arranque.
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # ─── Server ─────────────────────────────────────────────────────────
    app_name: str = Field(default="TrafficLens", description="Nombre del servicio")
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)
    debug: bool = Field(default=False)
    log_level: str = Field(default="INFO", description="Nivel del root logger")

    # ─── Consultas ──────────────────────────────────────────────────────
    default_range_days: int = Field(
        default=7, description="Ventana por defecto cuando faltan startDate/endDate",
    )
    popular_pages_default_limit: int = Field(
        default=5, description="Páginas devueltas por /popular-pages sin ?limit",
    )

    # ─── Event Store ────────────────────────────────────────────────────
    store_backend: Literal["memory", "sql"] = Field(
        default="memory",
        description="memory = log en proceso, sql = SQLAlchemy async",
    )

    # ─── Base de datos ──────────────────────────────────────────────────
    db_url: Optional[str] = Field(
        default=None,
        description="URL SQLAlchemy explícita (p. ej. sqlite+aiosqlite:///./tl.db)",
    )
    db_host: str = Field(default="localhost", description="MySQL host")
    db_port: int = Field(default=3306, description="MySQL port")
    db_user: str = Field(default="trafficlens", description="MySQL username")
    db_password: str = Field(default="trafficlens_secret", description="MySQL password")
    db_name: str = Field(default="trafficlens", description="MySQL database name")
    db_echo: bool = Field(default=False, description="Loguear queries SQL (debug)")
    db_pool_size: int = Field(default=5, description="Conexiones en el pool")
    db_max_overflow: int = Field(default=10, description="Conexiones extra en picos")

    # ─── Datos de demostración ──────────────────────────────────────────
    seed_demo_data: bool = Field(
        default=False, description="Poblar el store con tráfico sintético al arrancar",
    )
    seed_visitors: int = Field(default=100, description="Visitantes sintéticos a generar")
    seed_random_seed: Optional[int] = Field(
        default=None, description="Semilla para generar datos reproducibles",
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }


# Singleton global – se importa donde se necesite
settings = Settings()
