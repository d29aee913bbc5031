"""Environment variable names and fixed values used by envkit."""

# Runtime mode resolution (first set wins)
ENV_ENVKIT_MODE = "ENVKIT_MODE"
ENV_APP_ENV = "APP_ENV"
ENV_NODE_ENV = "NODE_ENV"
MODE_ENV_KEYS = [ENV_ENVKIT_MODE, ENV_APP_ENV, ENV_NODE_ENV]

DEFAULT_MODE = "development"
PRODUCTION_MODES = ("production", "prod")

# Options
ENV_ENVKIT_BASE_DIR = "ENVKIT_BASE_DIR"
ENV_ENVKIT_ALLOW_IN_PRODUCTION = "ENVKIT_ALLOW_IN_PRODUCTION"
ENV_ENVKIT_TARGET_FILE = "ENVKIT_TARGET_FILE"
ENV_ENVKIT_CONFIG_FILE = "ENVKIT_CONFIG_FILE"

# Logging
ENV_ENVKIT_LOG_LEVEL = "ENVKIT_LOG_LEVEL"
ENV_ENVKIT_LOG_PREFIX = "ENVKIT_LOG_PREFIX"
ENV_ENVKIT_LOG_MASK = "ENVKIT_LOG_MASK"

# Files
BASE_ENV_FILE = ".env"
LOCAL_ENV_FILE = ".env.local"
DEFAULT_ENCODING = "utf-8"
DEFAULT_TARGET_FILE = BASE_ENV_FILE

# Synthetic source identifier for the live process environment
PROCESS_ENV_SOURCE = "process.env"

NOT_AVAILABLE_MESSAGE = "Not available in production"
