import socket
import time

import pytest

from arenalegends.battle import Battle
from arenalegends.network import NetworkClient
from arenalegends.units import Faction


def _wait_for(condition, timeout=3.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if condition():
            return True
        time.sleep(0.01)
    return condition()


@pytest.fixture
def server():
    srv = socket.create_server(("127.0.0.1", 0))
    srv.settimeout(3.0)
    yield srv
    srv.close()


def _connected_pair(server):
    port = server.getsockname()[1]
    client = NetworkClient(host="127.0.0.1", port=port)
    client.connect()
    conn, _ = server.accept()
    conn.settimeout(3.0)
    return client, conn


def test_pair_message_sets_flag():
    client = NetworkClient()
    client.handle_data(b"!")
    assert client.pair_successfully is True
    assert list(client.inbox) == []


def test_plain_message_goes_to_inbox():
    client = NetworkClient()
    client.handle_data(b"3 20 5 170")
    assert list(client.inbox) == ["3 20 5 170"]
    assert client.pair_successfully is False


def test_opponent_left_message_is_queued():
    client = NetworkClient()
    client.handle_data("?")
    assert list(client.inbox) == ["?"]
    assert client.connected is False


def test_empty_data_is_ignored():
    client = NetworkClient()
    client.handle_data(b"")
    assert len(client.inbox) == 0


def test_write_pending_with_nothing_queued():
    client = NetworkClient()
    assert client.write_pending() is None


def test_write_pending_without_connection_drops_message():
    client = NetworkClient()
    client.outbox.append("1 20 5 170")
    assert client.write_pending() is None
    assert len(client.outbox) == 0


def test_connect_refused_raises():
    probe = socket.create_server(("127.0.0.1", 0))
    port = probe.getsockname()[1]
    probe.close()
    client = NetworkClient(host="127.0.0.1", port=port, timeout=1.0)
    with pytest.raises(OSError):
        client.connect()
    assert client.connected is False
    assert client.pairing is True


def test_server_pairing_over_socket(server):
    client, conn = _connected_pair(server)
    try:
        assert client.connected is True
        conn.sendall(b"!")
        assert _wait_for(lambda: client.pair_successfully)
    finally:
        client.disconnect()
        conn.close()


def test_server_command_reaches_inbox(server):
    client, conn = _connected_pair(server)
    try:
        conn.sendall(b"7 20 5 170")
        assert _wait_for(lambda: len(client.inbox) == 1)
        assert client.inbox[0] == "7 20 5 170"
    finally:
        client.disconnect()
        conn.close()


def test_write_pending_sends_bytes(server):
    client, conn = _connected_pair(server)
    try:
        client.outbox.append("5 18 4 160")
        assert client.write_pending() == "5 18 4 160"
        assert conn.recv(128) == b"5 18 4 160"
    finally:
        client.disconnect()
        conn.close()


def test_disconnect_closes_connection(server):
    client, conn = _connected_pair(server)
    try:
        client.disconnect()
        assert client.connected is False
        assert conn.recv(128) == b""
    finally:
        conn.close()


def test_inbox_feeds_battle():
    battle = Battle(online_mode=True)
    client = NetworkClient(inbox=battle.command_from_server, outbox=battle.command_to_server)
    client.handle_data(b"2 20 5 170")
    battle.put_opponent_entity()
    queued = battle.army_queue[Faction.RED]
    assert len(queued) == 1
    assert queued[0][1].name == "Musketeer"
    assert len(battle.command_from_server) == 0