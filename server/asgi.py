"""
ASGI entry point: ``uvicorn asgi:app``.

Builds the application from the environment settings.
"""

from config import initialize_logging
from main import create_app

initialize_logging()
app = create_app()
