import pytest
from fastapi.testclient import TestClient

import main
from products_server.config import Settings
from products_server.domain.errors import StoreUnavailableError


class _StubRepo:
    def __init__(self, reachable: bool):
        self.reachable = reachable
        self.closed = False

    async def ping(self):
        if not self.reachable:
            raise StoreUnavailableError("MongoDB ping failed")

    async def close(self):
        self.closed = True


def _patch_repo(monkeypatch, stub):
    monkeypatch.setattr(main.MongoProductRepo, "from_settings", classmethod(lambda cls, s: stub))


SETTINGS = Settings(db_user="u", db_pass="p")


def test_startup_connects_once_and_closes(monkeypatch):
    stub = _StubRepo(reachable=True)
    _patch_repo(monkeypatch, stub)
    app = main.create_app(SETTINGS)
    with TestClient(app) as cli:
        assert app.state.repo is stub
        assert cli.get("/healthz").status_code == 200
    assert stub.closed
    assert app.state.repo is None


def test_startup_fails_when_store_unreachable(monkeypatch):
    stub = _StubRepo(reachable=False)
    _patch_repo(monkeypatch, stub)
    with pytest.raises(StoreUnavailableError):
        with TestClient(main.create_app(SETTINGS)):
            pass
    assert stub.closed


def test_run_exits_without_credentials(monkeypatch):
    monkeypatch.delenv("DB_USER", raising=False)
    monkeypatch.delenv("DB_PASS", raising=False)
    with pytest.raises(SystemExit) as exc:
        main.run()
    assert exc.value.code == 1
