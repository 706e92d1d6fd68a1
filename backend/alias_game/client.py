"""HTTP client for the Alias REST API.

Mirrors the browser fetch helpers: the server base URL comes from
``ALIAS_SERVER_URL`` and the auth token is forwarded verbatim in the
``Authorization`` header. Failures are logged and re-raised as
:class:`ApiError`.
"""
import logging
import os
from typing import Any, Optional

import httpx

logger = logging.getLogger(__name__)

DEFAULT_SERVER_URL = 'http://localhost:5000'
API_PREFIX = '/api/v1'


class ApiError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def server_url() -> str:
    return os.environ.get('ALIAS_SERVER_URL', DEFAULT_SERVER_URL).rstrip('/')


class AliasClient:
    def __init__(self, base_url: Optional[str] = None, auth_token: Optional[str] = None,
                 transport: Optional[httpx.BaseTransport] = None, timeout: float = 10.0):
        self.base_url = (base_url or server_url()).rstrip('/')
        self.auth_token = auth_token
        self._http = httpx.Client(base_url=self.base_url + API_PREFIX, transport=transport, timeout=timeout)

    def close(self) -> None:
        self._http.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def _headers(self) -> dict:
        headers = {'Content-Type': 'application/json'}
        if self.auth_token:
            headers['Authorization'] = f'{self.auth_token}'
        return headers

    def _request(self, method: str, path: str, action: str, json: Any = None) -> Any:
        try:
            response = self._http.request(method, path, headers=self._headers(), json=json)
        except httpx.HTTPError as exc:
            logger.error('Error %s: %s', action, exc)
            raise ApiError(f'Failed to {action}: {exc}') from exc

        if response.is_error:
            try:
                detail = response.json().get('error') or response.reason_phrase
            except ValueError:
                detail = response.reason_phrase
            logger.error('Error %s: %s %s', action, response.status_code, detail)
            raise ApiError(f'Failed to {action}: {detail}', status_code=response.status_code)

        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    def login(self, username: str, password: str) -> dict:
        data = self._request('POST', '/auth/login', 'log in', json={'username': username, 'password': password})
        self.auth_token = data['access_token']
        return data

    def list_rooms(self) -> list:
        return self._request('GET', '/rooms', 'list rooms')

    def get_team(self, room_id: int, team_id: int) -> dict:
        return self._request('GET', f'/rooms/{room_id}/teams/{team_id}', 'get team')

    def add_player(self, room_id: int, team_id: int, user_id: Optional[int] = None) -> dict:
        body = {'user_id': user_id} if user_id is not None else {}
        return self._request('POST', f'/rooms/{room_id}/teams/{team_id}/players', 'add player', json=body)

    def next_turn(self, room_id: int, team_id: int) -> dict:
        return self._request('PATCH', f'/rooms/{room_id}/teams/{team_id}/next-turn', 'advance turn')

    def update_team_scores(self, room_id: int) -> dict:
        return self._request('PATCH', f'/rooms/{room_id}/calculate-scores', 'update team scores')
