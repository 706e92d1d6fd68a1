import json

import httpx
import pytest

from alias_game.client import AliasClient, ApiError, server_url


def _client(handler, token='tok-123'):
    return AliasClient(base_url='http://alias.test', auth_token=token, transport=httpx.MockTransport(handler))


def test_server_url_from_env(monkeypatch):
    monkeypatch.setenv('ALIAS_SERVER_URL', 'https://alias.example.com/')
    assert server_url() == 'https://alias.example.com'


def test_get_team_forwards_token_verbatim():
    seen = {}

    def handler(request):
        seen['path'] = request.url.path
        seen['auth'] = request.headers.get('Authorization')
        return httpx.Response(200, json={'id': 2, 'name': 'Team1', 'players': []})

    with _client(handler) as api:
        team = api.get_team(1, 2)

    assert team['name'] == 'Team1'
    assert seen == {'path': '/api/v1/rooms/1/teams/2', 'auth': 'tok-123'}


def test_update_team_scores_uses_patch():
    def handler(request):
        assert request.method == 'PATCH'
        assert request.url.path == '/api/v1/rooms/5/calculate-scores'
        return httpx.Response(200, json={'room_id': 5, 'teams': [], 'leader_team_id': None})

    with _client(handler, token=None) as api:
        assert api.update_team_scores(5)['room_id'] == 5


def test_login_stores_token():
    def handler(request):
        assert json.loads(request.content) == {'username': 'alice', 'password': 'pw'}
        return httpx.Response(200, json={'user': {'id': 1}, 'access_token': 'fresh'})

    with _client(handler, token=None) as api:
        api.login('alice', 'pw')
        assert api.auth_token == 'fresh'


def test_add_player_sends_user_id():
    def handler(request):
        assert json.loads(request.content) == {'user_id': 9}
        return httpx.Response(201, json={'room_id': 1, 'team_id': 2})

    with _client(handler) as api:
        assert api.add_player(1, 2, user_id=9) == {'room_id': 1, 'team_id': 2}


def test_error_response_raises_api_error():
    def handler(request):
        return httpx.Response(400, json={'error': 'Team is already full.'})

    with _client(handler) as api:
        with pytest.raises(ApiError) as exc_info:
            api.add_player(1, 2)
    assert exc_info.value.status_code == 400
    assert 'Team is already full.' in str(exc_info.value)


def test_network_failure_raises_api_error():
    def handler(request):
        raise httpx.ConnectError('connection refused', request=request)

    with _client(handler) as api:
        with pytest.raises(ApiError) as exc_info:
            api.list_rooms()
    assert exc_info.value.status_code is None
