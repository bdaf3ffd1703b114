#!/usr/bin/env python3
"""
Development server launcher for the Flask app generator.
Starts the FastAPI server with auto-reload.
"""

import os
import subprocess
import sys
from pathlib import Path

from appgen.settings import get_settings

# Colors for terminal output
GREEN = "\033[92m"
YELLOW = "\033[93m"
RESET = "\033[0m"

def print_colored(message: str, color: str = RESET):
    print(f"{color}{message}{RESET}")

def check_dependencies():
    """Check if required dependencies are installed."""
    issues = []

    try:
        import uvicorn  # noqa: F401
        import fastapi  # noqa: F401
    except ImportError:
        issues.append("Python dependencies not installed. Run: pip install -e .")

    return issues

def start_server():
    """Start the FastAPI server."""
    settings = get_settings()
    print_colored(f"Starting server on http://{settings.host}:{settings.port}", GREEN)
    base_dir = Path(__file__).parent.resolve()

    # Generated files must not trigger a reload mid-run, so watch the package only.
    cmd = [
        sys.executable, "-m", "uvicorn", "appgen.main:app",
        "--host", settings.host, "--port", str(settings.port), "--reload",
        "--reload-dir", str(base_dir / "appgen"),
    ]

    return subprocess.Popen(
        cmd,
        cwd=base_dir,
        env={**os.environ, "PYTHONPATH": str(base_dir)},
    )

def main():
    """Main entry point."""
    issues = check_dependencies()
    if issues:
        print_colored("\nIssues found:", YELLOW)
        for issue in issues:
            print_colored(f"  - {issue}", YELLOW)
        sys.exit(1)

    process = start_server()
    try:
        process.wait()
    except KeyboardInterrupt:
        print_colored("\nShutting down server...", YELLOW)
        process.terminate()
        try:
            process.wait(timeout=5)
        except subprocess.TimeoutExpired:
            process.kill()
        print_colored("Server stopped.", GREEN)
    sys.exit(process.returncode or 0)

if __name__ == "__main__":
    main()
