"""
Framework-agnostic handlers for the status / update / upload boundary.

Each handler takes a plain dict (or the matching request model) and always
returns a result; HTTP adapters only translate ApiResponse into their own
response objects.
"""
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError

from .config import EnvKitOptions, get_runtime_mode, is_production_mode
from .constants import LOCAL_ENV_FILE, NOT_AVAILABLE_MESSAGE
from .errors import EnvKitError
from .filesystem import EnvironmentReader, FileSystem, LocalFileSystem, ProcessEnvironment
from .logger import get_logger
from .service import PersistenceService, ResolutionService, UpdateCallback
from .types import StatusQuery, UpdateCommand, UploadCommand

logger = get_logger()


@dataclass
class ApiResponse:
    """Handler result plus the HTTP status an adapter should use."""
    body: Dict[str, Any] = field(default_factory=dict)
    status_code: int = 200


def _validation_message(e: ValidationError) -> str:
    parts = []
    for err in e.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()))
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts)


class EnvKitApi:
    """Status, update and upload operations behind the production gate."""

    def __init__(
        self,
        options: Optional[EnvKitOptions] = None,
        fs: Optional[FileSystem] = None,
        environ: Optional[EnvironmentReader] = None,
        on_update: Optional[UpdateCallback] = None,
    ):
        self.environ = environ or ProcessEnvironment()
        self.options = options or EnvKitOptions.from_env(self.environ)
        self.fs = fs or LocalFileSystem()
        self.on_update = on_update

    @property
    def runtime_mode(self) -> str:
        return (self.options.mode or get_runtime_mode(self.environ)).lower()

    def is_allowed(self) -> bool:
        return self.options.allow_in_production or not is_production_mode(self.runtime_mode)

    def _resolution(self, required_vars: Any = None) -> ResolutionService:
        return ResolutionService(
            specs=required_vars,
            fs=self.fs,
            environ=self.environ,
            options=self.options.file.to_options(),
        )

    def _required_vars_for(self, mode: str, query: StatusQuery) -> list:
        if query.required_vars:
            return query.required_vars
        env_config = self.options.environment_for(mode)
        if env_config and env_config.required_vars:
            return env_config.required_vars
        return self.options.required_vars

    def _target_path(self, target_file: Optional[str], target_env: Optional[str]) -> str:
        if not target_file:
            env_config = self.options.environment_for(target_env or self.runtime_mode)
            if env_config and env_config.target_env_file:
                target_file = env_config.target_env_file
            elif target_env:
                target_file = LOCAL_ENV_FILE
            else:
                target_file = self.options.file.target_path
        return os.path.abspath(os.path.join(self.options.base_dir, target_file))

    def _inside_base_dir(self, path: str) -> bool:
        base = os.path.abspath(self.options.base_dir)
        return os.path.commonpath([base, path]) == base

    # Status

    def handle_status(self, query: Union[StatusQuery, Dict[str, Any], None] = None) -> ApiResponse:
        if self.options.gate_status and not self.is_allowed():
            logger.warn("Status query refused: production mode")
            return ApiResponse({"error": NOT_AVAILABLE_MESSAGE}, 404)

        try:
            if not isinstance(query, StatusQuery):
                query = StatusQuery.model_validate(query or {})
        except ValidationError as e:
            return ApiResponse({"error": _validation_message(e)}, 400)

        mode = (query.mode or self.runtime_mode).lower()
        base_dir = query.base_dir or self.options.base_dir

        try:
            specs = self._required_vars_for(mode, query)
            result = self._resolution(specs).status(base_dir, mode)
        except EnvKitError as e:
            logger.error(f"Error checking environment variables: {e}")
            return ApiResponse({"error": str(e)}, 500)
        except Exception as e:
            logger.error(f"Unexpected error checking environment variables: {e}")
            return ApiResponse({"error": f"Failed to check environment status: {e}"}, 500)

        return ApiResponse({**result.to_dict(), "environment": mode}, 200)

    def status(self, query: Union[StatusQuery, Dict[str, Any], None] = None) -> Dict[str, Any]:
        """Status query: ValidationResult as a dict, or {"error": ...}."""
        return self.handle_status(query).body

    # Update / upload

    def _refused(self, path: str) -> ApiResponse:
        logger.warn(f"Update of {path} refused: production mode")
        return ApiResponse({"success": False, "path": path, "error": NOT_AVAILABLE_MESSAGE}, 404)

    def _persist(self, path: str, target_env: Optional[str], action) -> ApiResponse:
        if not self._inside_base_dir(path):
            return ApiResponse(
                {"success": False, "path": path, "error": "Target file must be inside the env directory"}, 400
            )

        persistence = PersistenceService(
            fs=self.fs,
            encoding=self.options.file.encoding,
            resolution=self._resolution(),
            on_update=self.on_update,
        )
        try:
            result = action(persistence)
        except Exception as e:
            logger.error(f"Error updating environment variables: {e}")
            return ApiResponse({"success": False, "path": path, "error": str(e)}, 500)

        body = result.to_dict()
        body["environment"] = (target_env or self.runtime_mode).lower()
        if result.success:
            return ApiResponse(body, 200)
        return ApiResponse(body, 400 if result.write.rejected else 500)

    def handle_update(self, command: Union[UpdateCommand, Dict[str, Any]]) -> ApiResponse:
        try:
            if not isinstance(command, UpdateCommand):
                command = UpdateCommand.from_body(command or {})
        except ValidationError as e:
            if not self.is_allowed():
                return self._refused(self._target_path(None, None))
            return ApiResponse({"success": False, "path": "", "error": _validation_message(e)}, 400)

        path = self._target_path(command.target_file, command.target_env)
        if not self.is_allowed():
            return self._refused(path)

        return self._persist(
            path,
            command.target_env,
            lambda p: p.update(path, command.values),
        )

    def update(self, command: Union[UpdateCommand, Dict[str, Any]]) -> Dict[str, Any]:
        """Update command: {success, path, error?}."""
        return self.handle_update(command).body

    def handle_upload(self, command: Union[UploadCommand, Dict[str, Any]]) -> ApiResponse:
        try:
            if not isinstance(command, UploadCommand):
                command = UploadCommand.model_validate(command or {})
        except ValidationError as e:
            if not self.is_allowed():
                return self._refused(self._target_path(None, None))
            return ApiResponse({"success": False, "path": "", "error": _validation_message(e)}, 400)

        path = self._target_path(command.target_file, command.target_env)
        if not self.is_allowed():
            return self._refused(path)

        return self._persist(
            path,
            command.target_env,
            lambda p: p.upload(path, command.content),
        )

    def upload(self, command: Union[UploadCommand, Dict[str, Any]]) -> Dict[str, Any]:
        """Upload command: parse dotenv text and merge it into the target file."""
        return self.handle_upload(command).body
