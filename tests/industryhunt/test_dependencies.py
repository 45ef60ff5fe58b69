import time
from concurrent.futures import ThreadPoolExecutor

import pytest

from industryhunt import dependencies


class _SlowClient:
    built: list['_SlowClient'] = []

    def __init__(self, *args, **kwargs):
        time.sleep(0.05)
        self.closed = False
        _SlowClient.built.append(self)

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def slow_clients(monkeypatch: pytest.MonkeyPatch):
    _SlowClient.built = []
    dependencies.reset_clients()
    monkeypatch.setattr(dependencies, 'SupabaseAuthClient', _SlowClient)
    monkeypatch.setattr(dependencies, 'SqlDataStore', _SlowClient)
    monkeypatch.setattr(dependencies.config, 'DATA_STORE', 'sql')
    yield _SlowClient.built
    dependencies.reset_clients()


@pytest.mark.parametrize('getter', [dependencies.get_auth_client, dependencies.get_data_store])
def test_concurrent_first_requests_build_one_client(slow_clients, getter) -> None:
    with ThreadPoolExecutor(max_workers=8) as pool:
        clients = list(pool.map(lambda _: getter(), range(8)))

    assert len(slow_clients) == 1
    assert all(client is clients[0] for client in clients)


def test_reset_clients_closes_cached_clients(slow_clients) -> None:
    auth_client = dependencies.get_auth_client()
    data_store = dependencies.get_data_store()

    dependencies.reset_clients()

    assert auth_client.closed and data_store.closed
    assert dependencies.get_auth_client() is not auth_client
