from .fastapi import create_envkit_router, get_envkit_api, EnvKitApiDep

__all__ = [
    "create_envkit_router",
    "get_envkit_api",
    "EnvKitApiDep",
]
