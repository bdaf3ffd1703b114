from functools import lru_cache
from pathlib import Path
from typing import ClassVar, Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):

    # Generated application output
    app_root: Path = Field(default=Path("flask_app"))
    history_filename: str = Field(default="generation_history.json")
    file_specs_path: Optional[Path] = Field(default=None)

    # Web shell
    templates_dir: Path = Field(default=Path("templates"))
    static_dir: Path = Field(default=Path("static"))
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8080)

    llm_mode: Literal["mock", "ollama", "ollama_cli"] = Field(default="ollama")
    ollama_model: str = Field(default="llama3.2")
    ollama_base_url: str = Field(default="http://localhost:11434")
    ollama_timeout: float = Field(default=600.0, gt=0)

    # Seconds to wait before each generation step
    step_delay: float = Field(default=1.0, ge=0)
    stack_name: str = Field(default="Python Flask")
    stack_version: str = Field(default="Flask v3")

    log_level: str = Field(default="INFO")

    # Annotate as ClassVar so Pydantic doesn't treat it as a model field.
    root_env: ClassVar[str] = str(Path(__file__).resolve().parents[1] / ".env")

    model_config = {
        "env_file": root_env,
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


@lru_cache
def get_settings() -> Settings:
    return Settings()
