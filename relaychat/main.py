"""Main application entry point.

Runs FastAPI (port 8000) with NiceGUI mounted for the chat interface.
Environment variables are loaded from .env file.
"""

import logging
import os
import sys

from dotenv import load_dotenv

# Load environment variables before any other imports that might need them
load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


def run_integrated() -> None:
    """Run FastAPI with NiceGUI mounted on the same server."""
    import uvicorn
    from nicegui import ui

    from relaychat.api.app import create_app
    from relaychat.ui.chat_page import chat_page  # noqa: F401 - Registers the page

    app = create_app()

    ui.run_with(
        app,
        title="relaychat",
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "relaychat-secret"),
    )

    port = int(os.getenv("PORT", "8000"))
    logger.info(f"Starting integrated server on http://localhost:{port}")
    logger.info(f"API docs available at http://localhost:{port}/docs")

    uvicorn.run(
        app,
        host=os.getenv("HOST", "0.0.0.0"),
        port=port,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


def run_separate() -> None:
    """Run FastAPI and NiceGUI as separate servers.

    FastAPI on PORT (default 8000), NiceGUI on port 8080. The UI reaches
    the API through API_BASE_URL.
    """
    import subprocess
    import time

    logger.info("Starting FastAPI on http://localhost:8000")
    logger.info("Starting NiceGUI on http://localhost:8080")

    fastapi_proc = subprocess.Popen(
        [
            sys.executable,
            "-m",
            "uvicorn",
            "relaychat.api.app:app",
            "--host",
            os.getenv("HOST", "0.0.0.0"),
            "--port",
            os.getenv("PORT", "8000"),
        ]
    )
    nicegui_proc = subprocess.Popen(
        [sys.executable, "-c", "from relaychat.ui.chat_page import main; main()"]
    )

    try:
        while fastapi_proc.poll() is None and nicegui_proc.poll() is None:
            time.sleep(1)
    except KeyboardInterrupt:
        logger.info("Shutting down servers...")
    finally:
        fastapi_proc.terminate()
        nicegui_proc.terminate()
        fastapi_proc.wait()
        nicegui_proc.wait()


def main() -> None:
    """Application entry point.

    Set RUN_MODE=separate to run FastAPI and NiceGUI on different ports.
    """
    mode = os.getenv("RUN_MODE", "integrated").lower()

    logger.info(f"Starting relaychat in {mode} mode")

    if mode == "separate":
        run_separate()
    else:
        run_integrated()


if __name__ == "__main__":
    main()
