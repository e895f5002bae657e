import pytest

from spa_server.app import create_app
from spa_server.config.config import ServerConfig

INDEX_HTML = b"<!doctype html><html><body><div id=\"app\"></div></body></html>\n"
APP_JS = b"console.log('hello');\n"
# Not valid UTF-8 on purpose
LOGO_PNG = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\xff\xfe\x00\x80"

ENV_VARS = ["ROOT", "HOST", "PORT", "ENTRY_POINT", "SHOW_ERROR_DETAILS", "LOG_LEVEL"]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def site(tmp_path):
    root = tmp_path / "site"
    root.mkdir()
    (root / "index.html").write_bytes(INDEX_HTML)
    (root / "app.js").write_bytes(APP_JS)
    (root / "logo.png").write_bytes(LOGO_PNG)
    (root / "assets").mkdir()
    (root / "assets" / "style.css").write_text("body { color: red; }\n")
    (root / "v1.2").mkdir()
    (root / "v1.2" / "data.json").write_text('{"ok": true}\n')
    (tmp_path / "secret.txt").write_text("outside the root\n")
    return root


@pytest.fixture
def config(site):
    return ServerConfig(root=str(site))


@pytest.fixture
def app(config):
    return create_app(config)


@pytest.fixture
def client(app):
    return app.test_client()
