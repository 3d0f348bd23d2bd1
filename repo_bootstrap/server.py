"""HTTP server for repository bootstrapping.

Endpoints:
  - GET /health
  - POST /repos
  - POST /repos/clone
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from repo_bootstrap.core.config import AppSettings
from repo_bootstrap.core.startup_validation import validate_all
from repo_bootstrap.domain.errors import (
    EventValidationError,
    MissingCredentialError,
    RepoCloneError,
    RepoCreationError,
    UnsupportedProviderError,
)
from repo_bootstrap.domain.models import InitializedRepo, InitializedSource, RepoParams
from repo_bootstrap.services.repo_service import LocalRepoService, RepoService

logger = logging.getLogger(__name__)


class CloneRequest(BaseModel):
    """Request body for /repos/clone."""

    repo: InitializedRepo
    path: str = Field(..., min_length=1, description="Existing directory to clone into.")


def create_app(
    *,
    settings: AppSettings | None = None,
    repo_service: RepoService | None = None,
) -> FastAPI:
    """Creates FastAPI app."""

    settings = settings or AppSettings()
    logging.basicConfig(level=settings.log_level.upper())
    service = repo_service or LocalRepoService(settings=settings)

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        if settings.validate_on_startup:
            await validate_all(settings=settings)
        yield
        if isinstance(service, LocalRepoService):
            await service.aclose()

    app = FastAPI(lifespan=lifespan)
    app.state.repo_service = service

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/repos", status_code=201)
    async def create_repo(params: RepoParams) -> InitializedRepo:
        try:
            return await service.initialize(params)
        except MissingCredentialError as exc:
            raise HTTPException(status_code=503, detail=str(exc)) from exc
        except UnsupportedProviderError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        except RepoCreationError as exc:
            raise HTTPException(
                status_code=502,
                detail={"message": str(exc), "provider_status": exc.status_code},
            ) from exc
        except EventValidationError as exc:
            logger.error("Repo created but event was invalid: %s", exc)
            created = exc.repo.model_dump() if exc.repo is not None else None
            raise HTTPException(
                status_code=500,
                detail={"message": str(exc), "created_repo": created},
            ) from exc

    @app.post("/repos/clone")
    async def clone_repo(req: CloneRequest) -> InitializedSource:
        try:
            # git clone blocks; keep it off the event loop.
            return await asyncio.to_thread(service.clone_local, req.repo, req.path)
        except UnsupportedProviderError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        except RepoCloneError as exc:
            raise HTTPException(status_code=500, detail=str(exc)) from exc

    return app


def main() -> None:
    """Console entry point."""

    settings = AppSettings()
    app = create_app(settings=settings)
    uvicorn.run(
        app,
        host=settings.listen_host,
        port=settings.listen_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
