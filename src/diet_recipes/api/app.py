"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from diet_recipes.api.profiles import router as profiles_router
from diet_recipes.api.recipes import router as recipes_router
from diet_recipes.api.shopping import router as shopping_router
from diet_recipes.app_logging import configure_logging
from diet_recipes.containers import AppContainer
from diet_recipes.domain.errors import (
    MealIdeaError,
    NotFoundError,
    RecipeSourceError,
)


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(profiles_router)
    app.include_router(recipes_router)
    app.include_router(shopping_router)

    @app.exception_handler(NotFoundError)
    async def not_found(request: Request, exc: NotFoundError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)}
        )

    @app.exception_handler(MealIdeaError)
    async def invalid_meal_idea(request: Request, exc: MealIdeaError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": str(exc)},
        )

    @app.exception_handler(RecipeSourceError)
    async def recipe_source_failed(
        request: Request, exc: RecipeSourceError
    ) -> JSONResponse:
        logger.warning("Recipe source failed", extra={"path": request.url.path})
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY, content={"detail": str(exc)}
        )

    @app.exception_handler(httpx.HTTPError)
    async def upstream_failed(request: Request, exc: httpx.HTTPError) -> JSONResponse:
        logger.exception("Upstream request failed", extra={"path": request.url.path})
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content={"detail": "Upstream service unavailable"},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
