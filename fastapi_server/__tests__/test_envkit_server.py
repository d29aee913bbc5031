import os

from fastapi.testclient import TestClient

from envkit import EnvKitApi, EnvKitOptions, StaticEnvironment
from fastapi_server.app.app import create_app, load_envkit_options


def make_client(tmp_path, mode="development"):
    api = EnvKitApi(
        EnvKitOptions(base_dir=str(tmp_path), mode=mode, required_vars=["API_KEY"]),
        environ=StaticEnvironment({}),
    )
    return TestClient(create_app(api))


def test_health(tmp_path):
    with make_client(tmp_path) as client:
        response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_update_then_status(tmp_path):
    with make_client(tmp_path) as client:
        before = client.get("/api/envkit/status").json()
        update = client.post("/api/envkit/update", json={"API_KEY": "abc"})
        after = client.get("/api/envkit/status").json()

    assert before["isValid"] is False
    assert update.status_code == 200
    assert after["isValid"] is True
    assert (tmp_path / ".env").read_text() == "API_KEY=abc\n"


def test_production_server_refuses_updates(tmp_path):
    with make_client(tmp_path, mode="production") as client:
        response = client.post("/api/envkit/update", json={"API_KEY": "abc"})

    assert response.status_code == 404
    assert not (tmp_path / ".env").exists()


def test_options_from_config_file(tmp_path, monkeypatch):
    config = tmp_path / "envkit.yaml"
    config.write_text("base_dir: .\nrequired_vars: [API_KEY]\n")
    monkeypatch.setenv("ENVKIT_CONFIG_FILE", str(config))

    options = load_envkit_options()

    assert os.path.normpath(options.base_dir) == str(tmp_path)
    assert [v.name for v in options.required_vars] == ["API_KEY"]


def test_options_from_environment(tmp_path, monkeypatch):
    monkeypatch.delenv("ENVKIT_CONFIG_FILE", raising=False)
    monkeypatch.setenv("ENVKIT_BASE_DIR", str(tmp_path))

    assert load_envkit_options().base_dir == str(tmp_path)
