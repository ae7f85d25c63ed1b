"""
Curio - Main Application Entry Point

This module serves as the primary entry point for the Curio application.
It opens the document store, repairs lesson plans left behind by an
interrupted save, initializes the Gradio UI and launches the web interface.
"""
import asyncio
import logging

from curio.config import settings as config
from curio.core.learning_service import LearningService
from curio.storage.document_store import initialize_store
from curio.ui.gradio_app import create_gradio_ui


def main():
    """
    Main entry point for the Curio application.

    Initializes the Gradio interface and launches the web server.
    """
    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    service = LearningService(initialize_store())
    repaired = asyncio.run(service.repair())
    if repaired:
        print(f"✓ Repaired {len(repaired)} learning request(s) with orphaned lesson plans")

    demo = create_gradio_ui(service)
    print("\n🚀 Launching Curio...")

    # Configure for Cloud Run
    server_name = config.GRADIO_SERVER_NAME
    server_port = config.GRADIO_SERVER_PORT

    print(f"📍 Server will be available at http://{server_name}:{server_port}")

    demo.launch(
        server_name=server_name,
        server_port=server_port
    )


if __name__ == "__main__":
    main()
