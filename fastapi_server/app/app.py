"""EnvKit FastAPI Server."""

import os
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from envkit import EnvKitApi, EnvKitOptions, load_options
from envkit.constants import ENV_ENVKIT_CONFIG_FILE
from envkit.integrations import create_envkit_router


def load_envkit_options() -> EnvKitOptions:
    """Options from ENVKIT_CONFIG_FILE when set, else from ENVKIT_* variables."""
    config_file = os.getenv(ENV_ENVKIT_CONFIG_FILE)
    if config_file:
        return load_options(config_file)
    return EnvKitOptions.from_env()


def create_app(envkit_api: Optional[EnvKitApi] = None) -> FastAPI:
    envkit_api = envkit_api or EnvKitApi(load_envkit_options())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        print(f"EnvKit server started.")
        print(f"  mode: {envkit_api.runtime_mode}")
        print(f"  base_dir: {envkit_api.options.base_dir}")
        print(f"  writable: {envkit_api.is_allowed()}")
        yield

    app = FastAPI(
        title="EnvKit Server",
        description="Resolve, validate and persist .env configuration",
        version="0.1.0",
        lifespan=lifespan,
    )

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy"}

    app.include_router(create_envkit_router(envkit_api))
    return app


app = create_app()
