from __future__ import annotations

import os
from pathlib import Path

JSON_BACKEND = "json"
SQL_BACKEND = "sql"
SUPPORTED_BACKENDS = (JSON_BACKEND, SQL_BACKEND)


def vehicle_store_backend() -> str:
    backend = os.getenv("VEHICLE_STORE_BACKEND", JSON_BACKEND).strip().lower()

    if backend not in SUPPORTED_BACKENDS:
        raise RuntimeError(
            f"VEHICLE_STORE_BACKEND must be one of {SUPPORTED_BACKENDS}, got '{backend}'"
        )

    return backend


def vehicles_document_path() -> Path:
    return Path(os.getenv("VEHICLES_DB_PATH", "data/vehicles.json"))


def uploads_dir() -> Path:
    return Path(os.getenv("UPLOADS_DIR", "uploads"))


def catalog_api_base() -> str:
    return os.getenv("DP_CARS_API_BASE", "http://localhost:10000").rstrip("/")


def client_cache_path() -> Path:
    return Path(os.getenv("DP_CARS_CACHE_PATH", ".dp_cars_cache.json"))


def environment() -> str:
    return os.getenv("ENVIRONMENT", "development")

def cors_origins() -> list[str]:
    """Comma-separated CORS_ORIGINS; every origin is allowed when unset."""
    raw = os.getenv("CORS_ORIGINS", "*")
    origins = [origin.strip() for origin in raw.split(",") if origin.strip()]
    return origins or ["*"]


def database_url() -> str:
    """Only read with the SQL backend; there is no default database."""
    url = os.getenv("DATABASE_URL")

    if not url:
        raise RuntimeError(
            f"DATABASE_URL must be set when VEHICLE_STORE_BACKEND={SQL_BACKEND}"
        )

    return url
