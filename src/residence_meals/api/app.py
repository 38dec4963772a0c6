"""FastAPI application factory."""

from fastapi import FastAPI

from residence_meals.api.admin import router as admin_router
from residence_meals.api.kitchen import router as kitchen_router
from residence_meals.api.residents import router as residents_router
from residence_meals.app_logging import configure_logging
from residence_meals.containers import AppContainer


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()

    app = FastAPI(title="Residence meals")
    app.state.container = container

    app.include_router(residents_router)
    app.include_router(kitchen_router)
    app.include_router(admin_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
