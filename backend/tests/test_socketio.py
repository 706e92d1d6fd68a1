from alias_game import socketio


def _events(sio, name):
    return [pkt for pkt in sio.get_received('/ws') if pkt['name'] == name]


def test_socket_connect_and_join(sio_client, seeded):
    assert sio_client.is_connected('/ws')
    room = seeded[0]
    sio_client.get_received('/ws')

    sio_client.emit('join_room', {'room_id': room.id}, namespace='/ws')
    joined = _events(sio_client, 'joined')
    assert joined and joined[0]['args'][0]['room'] == f'room:{room.id}'


def test_join_unknown_room_reports_error(sio_client):
    sio_client.get_received('/ws')
    sio_client.emit('join_room', {'room_id': 999}, namespace='/ws')
    errors = _events(sio_client, 'error')
    assert errors[0]['args'][0] == {'error': 'Room 999 not found'}


def test_send_message_requires_token(sio_client, seeded):
    sio_client.get_received('/ws')
    sio_client.emit('send_message', {'room_id': seeded[0].id, 'content': 'hi'}, namespace='/ws')
    errors = _events(sio_client, 'error')
    assert errors[0]['args'][0] == {'error': 'Unauthorized'}


def test_send_message_is_persisted_and_broadcast(flask_app, sio_client, seeded, make_user, services):
    room = seeded[0]
    alice, token = make_user('alice')
    author = socketio.test_client(flask_app, namespace='/ws', auth={'token': token})
    try:
        connected = _events(author, 'connected')
        assert connected[0]['args'][0]['user_id'] == alice.id

        sio_client.emit('join_room', {'room_id': room.id}, namespace='/ws')
        author.emit('join_room', {'room_id': room.id}, namespace='/ws')
        sio_client.get_received('/ws')
        author.get_received('/ws')

        author.emit('send_message', {'room_id': room.id, 'content': 'guess: apple'}, namespace='/ws')

        received = _events(sio_client, 'message')
        assert received[0]['args'][0]['content'] == 'guess: apple'
        assert received[0]['args'][0]['user_id'] == alice.id
        assert [m.content for m in services.messages.list_for_room(room.id)] == ['guess: apple']
    finally:
        author.disconnect(namespace='/ws')


def test_rest_mutations_are_broadcast(client, sio_client, seeded, make_user):
    room = seeded[0]
    team_id = room.team_ids[0]
    _, token = make_user('alice')
    sio_client.emit('join_room', {'room_id': room.id}, namespace='/ws')
    sio_client.get_received('/ws')

    client.post(f'/api/v1/rooms/{room.id}/teams/{team_id}/players', json={}, headers={'Authorization': token})
    updates = _events(sio_client, 'team_update')
    assert updates[0]['args'][0]['id'] == team_id
    assert len(updates[0]['args'][0]['players']) == 1

    client.patch(f'/api/v1/rooms/{room.id}/calculate-scores')
    assert _events(sio_client, 'scores_updated')


def test_leave_room_stops_broadcasts(client, sio_client, seeded, make_user):
    room = seeded[0]
    _, token = make_user('alice')
    sio_client.emit('join_room', {'room_id': room.id}, namespace='/ws')
    sio_client.emit('leave_room', {'room_id': room.id}, namespace='/ws')
    assert _events(sio_client, 'left')

    client.post(f'/api/v1/rooms/{room.id}/messages', json={'content': 'hello'}, headers={'Authorization': token})
    assert not _events(sio_client, 'message')


def test_ping(sio_client):
    sio_client.get_received('/ws')
    sio_client.emit('ping', {'n': 1}, namespace='/ws')
    assert _events(sio_client, 'pong')[0]['args'][0] == {'n': 1}
