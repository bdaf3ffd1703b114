from __future__ import annotations

from fastapi import APIRouter, Depends, Form, HTTPException, Request
from fastapi.responses import HTMLResponse, PlainTextResponse, Response
from pydantic import ValidationError

from appgen.core.history import load_history
from appgen.core.pipeline import GenerationPipeline
from appgen.core.progress import ProgressStore
from appgen.settings import get_settings
from appgen.utils.logging import get_logger
from appgen.utils.schemas import GenerationHistory, ProgressSnapshot

router = APIRouter(tags=["generator"])
LOGGER = get_logger(__name__)

DEFAULT_INDEX_HTML = """
<h1>Flask App Generator</h1>
<form method="post">
    <label for="user_input">Describe the Flask app you want to create or modify:</label><br>
    <input type="text" id="user_input" name="user_input" size="50"><br><br>
    <input type="submit" value="Generate/Update Flask App">
</form>
"""

PROGRESS_HTML = """
<h1>Progress</h1>
<pre id="progress" style="white-space: pre-wrap; word-wrap: break-word;"></pre>
<script>
    function updateProgress() {
        fetch('/progress')
        .then(response => response.json())
        .then(data => {
            document.getElementById('progress').textContent = data.output;
            if (data.completed) {
                setTimeout(() => window.location.href = '/', 3000);
            } else {
                setTimeout(updateProgress, 2000);
            }
        });
    }
    updateProgress();
</script>
"""


def get_progress_store(request: Request) -> ProgressStore:
    return request.app.state.progress


def get_pipeline(request: Request) -> GenerationPipeline:
    return request.app.state.pipeline


@router.get("/", response_class=HTMLResponse)
async def home(progress: ProgressStore = Depends(get_progress_store)) -> Response:
    progress.reset()

    index_path = get_settings().templates_dir / "index.html"
    if index_path.exists():
        try:
            return HTMLResponse(index_path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as e:
            LOGGER.error("Error reading %s: %s", index_path, e)
            return PlainTextResponse("Error reading index.html", status_code=500)
    return HTMLResponse(DEFAULT_INDEX_HTML)


@router.post("/", response_class=HTMLResponse)
async def submit(
    user_input: str = Form(...),
    pipeline: GenerationPipeline = Depends(get_pipeline),
) -> HTMLResponse:
    LOGGER.info("Generation requested: %s", user_input[:100])
    pipeline.start(user_input)
    return HTMLResponse(PROGRESS_HTML)


@router.get("/progress", response_model=ProgressSnapshot)
async def get_progress(progress: ProgressStore = Depends(get_progress_store)) -> ProgressSnapshot:
    return progress.snapshot()


@router.get("/history", response_model=GenerationHistory)
async def get_history(pipeline: GenerationPipeline = Depends(get_pipeline)) -> GenerationHistory:
    """Return the history file written by the last completed run."""
    path = pipeline.history_path
    try:
        return load_history(path)
    except FileNotFoundError:
        raise HTTPException(status_code=404, detail="No generation history yet")
    except (OSError, UnicodeDecodeError, ValidationError) as e:
        LOGGER.error("Error reading history file %s: %s", path, e)
        raise HTTPException(status_code=500, detail="Error reading generation history")
