"""ASGI entry point for hosted deployments (``uvicorn main:app``)."""

from app import create_app
from core.config import load_config, require_serving_config
from ui.console import ConsoleLogger

config = require_serving_config(load_config())
app = create_app(config, ConsoleLogger())
