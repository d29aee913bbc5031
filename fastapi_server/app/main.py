"""
Server Entry Point
Loads the server's own .env file before the app reads its envkit options.
"""

import os
from dotenv import load_dotenv

# Step 1: Load .env file if exists
app_dir = os.path.dirname(os.path.abspath(__file__))
env_path = os.path.join(app_dir, ".env")
if os.path.exists(env_path):
    load_dotenv(env_path)
    print(f"  .env file: {env_path}")

# Step 2: Import and expose the app (after ENV is loaded)
# This import must happen AFTER load_dotenv so that EnvKitOptions sees ENVKIT_* vars
from .app import app  # noqa: E402

__all__ = ["app"]
