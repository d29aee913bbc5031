import pytest
from envkit import FileMergeWriter, get_log_level, get_logger, set_log_level
from envkit.sensitive import REDACTED, set_log_mask


@pytest.fixture(autouse=True)
def debug_logging():
    previous = get_log_level()
    set_log_level('debug')
    set_log_mask(True)
    yield
    set_log_level(previous)


def test_levels_filter_output(capsys):
    logger = get_logger()
    set_log_level('warn')

    logger.info("hidden")
    logger.warn("shown")

    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err == "[envkit] shown\n"


def test_silent_disables_everything(capsys):
    set_log_level('silent')

    get_logger().error("nothing")

    assert capsys.readouterr().err == ""
    assert get_logger().is_enabled('error') is False


def test_variable_masks_secrets(capsys):
    get_logger().variable('debug', "OVERWRITE", "API_KEY", "new-secret", previous="old-secret")

    out = capsys.readouterr().out
    assert out == f"[envkit] ENV OVERWRITE: API_KEY = {REDACTED} (was: {REDACTED})\n"


def test_variables_masks_each_value(capsys):
    get_logger().variables('debug', "loaded", {"PORT": "8080", "DB_PASSWORD": "hunter2"})

    out = capsys.readouterr().out
    assert "'PORT': '8080'" in out
    assert "hunter2" not in out


def test_variable_skipped_below_level(capsys):
    set_log_level('info')

    get_logger().variable('debug', "SET", "A", "1")

    assert capsys.readouterr().out == ""


def test_writer_never_logs_secret_values(env_dir, write_env, capsys):
    path = write_env(".env", "GITHUB_TOKEN=ghp_old\n")

    FileMergeWriter().merge_write(str(path), {"GITHUB_TOKEN": "ghp_new", "PORT": "3000"})

    out = capsys.readouterr().out
    assert "ghp_" not in out
    assert "ENV SET: PORT = 3000" in out
    assert f"ENV OVERWRITE: GITHUB_TOKEN = {REDACTED}" in out
