from typing import Annotated, Any, List, Optional

from fastapi import APIRouter, Body, Depends, Query
from fastapi.responses import JSONResponse

from ..api import ApiResponse, EnvKitApi

_default_api: Optional[EnvKitApi] = None


def get_envkit_api() -> EnvKitApi:
    """
    FastAPI dependency that provides the process-wide EnvKitApi.
    Options are read from ENVKIT_* variables on first use.
    """
    global _default_api
    if _default_api is None:
        _default_api = EnvKitApi()
    return _default_api


EnvKitApiDep = Annotated[EnvKitApi, Depends(get_envkit_api)]


def _respond(result: ApiResponse) -> JSONResponse:
    return JSONResponse(content=result.body, status_code=result.status_code)


def create_envkit_router(
    api: Optional[EnvKitApi] = None,
    prefix: str = "/api/envkit",
    tags: Optional[List[str]] = None,
) -> APIRouter:
    """
    Create a router exposing the status, update and upload handlers.

    When api is None the router resolves it through get_envkit_api, so
    tests can swap it with app.dependency_overrides.
    """
    router = APIRouter(prefix=prefix, tags=tags or ["EnvKit"])

    def bound_api() -> EnvKitApi:
        return api

    ApiDep = Annotated[EnvKitApi, Depends(bound_api if api is not None else get_envkit_api)]

    @router.get("/status")
    def get_status(
        envkit: ApiDep,
        mode: Optional[str] = None,
        required_vars: Annotated[Optional[List[str]], Query(alias="requiredVars")] = None,
    ):
        """Missing and declared variables for the current mode."""
        return _respond(envkit.handle_status({"mode": mode, "requiredVars": required_vars or []}))

    @router.post("/status")
    def post_status(envkit: ApiDep, body: Any = Body(default=None)):
        """Status query with full variable specs in the body."""
        return _respond(envkit.handle_status(body))

    @router.post("/update")
    def post_update(envkit: ApiDep, body: Any = Body(default=None)):
        """Merge variables into the target env file."""
        return _respond(envkit.handle_update(body))

    @router.post("/upload")
    def post_upload(envkit: ApiDep, body: Any = Body(default=None)):
        """Merge dotenv text into the target env file."""
        return _respond(envkit.handle_upload(body))

    return router
