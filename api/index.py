"""
Vercel Serverless Function wrapper for the StatCards FastAPI app
"""
import sys
from pathlib import Path

# Add backend to Python path when running from a source checkout
backend_path = Path(__file__).parent.parent / "backend"
sys.path.insert(0, str(backend_path))

from statcards.config import get_settings
from statcards.main import app, configure_logging

configure_logging(get_settings().log_level)

# Mangum converts API Gateway / Lambda style events into ASGI calls
from mangum import Mangum

mangum_handler = Mangum(app, lifespan="off")


def handler(event, context=None):
    """Vercel serverless function handler"""
    return mangum_handler(event, context)
