from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from dp_cars.entrypoints.http.exception_handlers import register_exception_handlers
from dp_cars.entrypoints.http.routes.admin_vehicles import router as admin_vehicles_router
from dp_cars.entrypoints.http.routes.health import router as health_router
from dp_cars.entrypoints.http.routes.vehicles import router as vehicles_router
from dp_cars.infra.config import cors_origins, uploads_dir


def build_app() -> FastAPI:
    app = FastAPI(
        title="DP Cars API",
        description="""
        Dealership vehicle catalog API.

        ## Features
        - Search the catalog by type and free text, sorted and paginated
        - Get vehicle details
        - Manage listings and their photos (admin)

        ## Photos
        New listings need 5 to 10 photos (jpeg, jpg, png, webp; 5 MB max each).
        Photos are served from `/uploads`.

        ## Error Handling
        All errors return structured JSON responses with error codes.
        See the error response schemas in the API documentation.
        """,
        version="0.1.0",
        docs_url="/docs",  # Swagger UI
        redoc_url="/redoc",  # ReDoc alternative
        openapi_url="/openapi.json",  # OpenAPI schema
    )

    # Browser clients load the catalog from another origin
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins(),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register global exception handlers
    register_exception_handlers(app)

    # Register routers
    app.include_router(health_router, prefix="/api")
    app.include_router(vehicles_router, prefix="/api")
    app.include_router(admin_vehicles_router, prefix="/api")

    app.mount("/uploads", StaticFiles(directory=uploads_dir(), check_dir=False), name="uploads")

    return app


app = build_app()
