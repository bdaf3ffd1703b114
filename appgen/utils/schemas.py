"""Pydantic schemas for API responses and persisted artifacts."""
from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field

ProgressStatus = Literal["idle", "running", "completed"]


class ProgressSnapshot(BaseModel):
    """Point-in-time copy of the generation progress record."""
    model_config = ConfigDict(frozen=True)

    status: ProgressStatus = "idle"
    iteration: int = 0
    max_iteration: int = 0
    output: str = ""
    completed: bool = False


class FileSpecEntry(BaseModel):
    """One file of the generation plan."""
    model_config = ConfigDict(frozen=True)

    file_name: str = Field(..., min_length=1, description="Path relative to the app root")
    instruction: str = Field(..., min_length=1, description="Appended to the shared prompt")


class HistoryEntry(BaseModel):
    """Record of one successfully generated file."""
    step: int = Field(..., ge=1)
    file_name: str
    file_operation: str
    file_content: str


class GenerationHistory(BaseModel):
    """The artifact written at the end of a run."""
    iterations: List[HistoryEntry] = Field(default_factory=list)
    app_directory: str
