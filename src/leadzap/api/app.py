"""ASGI entrypoint: ``uvicorn leadzap.api.app:app``."""

from .factory import create_app

app = create_app()
