import pytest
from envkit import StaticEnvironment


@pytest.fixture
def env_dir(tmp_path):
    """Empty directory standing in for the application root."""
    return tmp_path


@pytest.fixture
def write_env(env_dir):
    """Write a dotenv file into env_dir and return its path."""
    def _write(name, content):
        path = env_dir / name
        path.write_text(content, encoding="utf-8")
        return path
    return _write


@pytest.fixture
def no_process_env():
    return StaticEnvironment({})
