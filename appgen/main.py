from __future__ import annotations

from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from appgen.api import assets, generator
from appgen.core.file_specs import load_file_specs
from appgen.core.pipeline import GenerationPipeline
from appgen.core.progress import ProgressStore
from appgen.llm.adapter import get_llm_adapter
from appgen.settings import get_settings
from appgen.utils.logging import configure_logging, get_logger

LOGGER = get_logger(__name__)
configure_logging()

def _mount_static(app: FastAPI, directory: Path) -> None:
    # A later startup (new settings) replaces the previous mount
    app.router.routes[:] = [r for r in app.router.routes if getattr(r, "name", None) != "static"]
    app.mount("/static", StaticFiles(directory=directory), name="static")

@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()

    # Asset directories served by the web shell
    for directory in (settings.static_dir, settings.templates_dir):
        directory.mkdir(parents=True, exist_ok=True)
    app.state.static_dir = settings.static_dir
    _mount_static(app, settings.static_dir)

    progress = ProgressStore()
    app.state.progress = progress
    app.state.pipeline = GenerationPipeline(
        progress,
        get_llm_adapter(),
        settings.app_root,
        file_specs=load_file_specs(settings.file_specs_path),
        step_delay=settings.step_delay,
        history_filename=settings.history_filename,
        stack_name=settings.stack_name,
        stack_version=settings.stack_version,
    )
    LOGGER.info(
        "Generator ready (llm_mode=%s, model=%s, app_root=%s)",
        settings.llm_mode, settings.ollama_model, settings.app_root,
    )
    yield

app = FastAPI(
    title="Flask App Generator",
    version="0.1.0",
    lifespan=lifespan
)

# Global Exception Handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    LOGGER.error("Global exception: %s", exc, exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal Server Error"},
    )

app.include_router(generator.router)
app.include_router(assets.router)
