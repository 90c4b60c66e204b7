"""
WasteWatch - WSGI entry point for Gunicorn.
"""

import os
from dotenv import load_dotenv

# Load .env if present
load_dotenv()

from wastewatch import create_app

app = create_app()
