import pytest
import requests

import client
import run_psql


def test_psql_connects_as_forecast_user(monkeypatch):
    calls = []
    monkeypatch.setattr(run_psql.subprocess, 'run',
                        lambda cmd, check: calls.append(list(cmd)))

    run_psql.main(['--runtime', 'podman'])

    cmd = calls[0]
    assert cmd[:2] == ['podman', 'run']
    assert cmd[cmd.index('--network') + 1] == 'host'
    assert cmd[-5:] == ['psql', '-h', 'localhost', '-U', 'forecast']


class FakeResponse:
    def __init__(self, text, status_code=200):
        self.text = text
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(self.text)


@pytest.fixture
def gets(monkeypatch):
    recorded = []

    def fake_get(url, **kwargs):
        recorded.append((url, kwargs))
        return FakeResponse('<html>ok</html>')

    monkeypatch.setattr(client.requests, 'get', fake_get)
    return recorded


def test_client_weather(gets, capsys):
    client.main(['weather', 'Oslo'])

    assert gets == [('http://127.0.0.1:3000/weather',
                     {'params': {'city': 'Oslo'}})]
    assert '<html>ok</html>' in capsys.readouterr().out


def test_client_stats_sends_basic_auth(gets):
    client.main(['--base-url', 'http://localhost:8080/', 'stats',
                 '--password', 'secret'])

    assert gets == [('http://localhost:8080/stats',
                     {'auth': ('forecast', 'secret')})]


def test_client_raises_on_error_status(monkeypatch):
    monkeypatch.setattr(client.requests, 'get',
                        lambda url, **kwargs: FakeResponse('unauthorized', 401))

    with pytest.raises(requests.HTTPError):
        client.main(['stats'])
