"""
FastAPI Backend for the Grounded Assistants
============================================

Provides REST API for:
- Price index and industrial activity assistants (POST /api/{slug})
- Health check with per-store freshness readiness
- Optional public frontend

Every configured store is refreshed once at startup; the resulting
readiness decides whether queries filter on is_latest.
"""

from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, Dict, List, Optional

from fastapi import Body, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel

import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from config.settings import Settings, settings as default_settings
from src import __version__
from src.freshness.refresher import FreshnessRefresher
from src.generation.grounded_answer import GroundedAnswerer
from src.pipeline.assistant import build_pipelines, load_domains
from src.pipeline.readiness import ReadinessState, build_readiness
from src.provider.client import ProviderClient


# ============== Pydantic Models ==============

class AskResponse(BaseModel):
    """Assistant answer."""
    text: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str
    assistants: List[str]
    readiness: Dict[str, bool]


# ============== Application Setup ==============

def create_app(
    config: Optional[Settings] = None,
    provider: Optional[Any] = None
) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        config: Settings to use (defaults to the global settings)
        provider: Remote provider client (defaults to ProviderClient)
    """
    config = config or default_settings
    config.initialize()
    provider = provider or ProviderClient()

    domains = load_domains(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Readiness is computed before any request is served
        if config.freshness.refresh_on_startup:
            refresher = FreshnessRefresher(
                provider,
                list_limit=config.freshness.list_limit,
                lookup_concurrency=config.freshness.lookup_concurrency
            )
            readiness = build_readiness(refresher, [d.store_id for d in domains])
        else:
            readiness = ReadinessState()

        app.state.readiness = readiness
        app.state.pipelines = build_pipelines(
            domains,
            GroundedAnswerer(provider, model=config.provider.model),
            readiness
        )
        print(f"[API] Assistants: {', '.join('/api/' + d.slug for d in domains)}")
        yield

    app = FastAPI(
        title="Grounded Assistants",
        description="Price index and industrial activity answers from registered materials",
        version=__version__,
        lifespan=lifespan
    )

    # CORS for frontend
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ============== Endpoints ==============

    @app.get("/health", response_model=HealthResponse)
    def health_check():
        """Report which stores have trusted freshness tags."""
        return HealthResponse(
            status="healthy",
            version=__version__,
            assistants=[d.slug for d in domains],
            readiness=app.state.readiness.to_dict()
        )

    @app.post("/api/{slug}", response_model=AskResponse)
    def ask_assistant(slug: str, body: Any = Body(None)):
        """
        Answer a conversation for one assistant.

        Failures come back as a 500 with the assistant's label and the
        raw detail. A body that is not an object is an empty
        conversation.
        """
        pipeline = app.state.pipelines.get(slug)
        if pipeline is None:
            raise HTTPException(status_code=404, detail=f"Unknown assistant: {slug}")

        messages = body.get("messages") if isinstance(body, dict) else None

        try:
            return AskResponse(text=pipeline.ask(messages))
        except Exception as e:
            print(f"[API] /api/{slug} failed: {e}")
            return JSONResponse(
                status_code=500,
                content={"text": f"{pipeline.domain.label} server error", "detail": str(e)}
            )

    # ============== Static Frontend ==============

    index_path = config.paths.base_dir / config.paths.index_file

    @app.get("/")
    def serve_frontend():
        """Serve the frontend HTML."""
        if index_path.exists():
            return FileResponse(index_path)
        raise HTTPException(status_code=404, detail="Frontend not found")

    public_dir = config.paths.public_dir
    if public_dir.exists():
        app.mount("/static", StaticFiles(directory=str(public_dir)), name="static")

    return app


app = create_app()


# ============== Run Configuration ==============

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "api.main:app",
        host=default_settings.api_host,
        port=default_settings.api_port,
        reload=default_settings.debug
    )
