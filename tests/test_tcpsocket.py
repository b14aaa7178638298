import socket

import pytest

from syslab.tcpsocket import ExitCode, SocketError, TcpSocket


@pytest.fixture
def server():
    srv = TcpSocket()
    srv.init_server(0)
    yield srv
    srv.close()


def test_fileno_is_minus_one_before_create():
    assert TcpSocket().fileno() == -1


def test_create_and_close():
    sock = TcpSocket()
    sock.create()
    assert sock.fileno() >= 0
    sock.close()
    assert sock.fileno() < 0


def test_context_manager_closes():
    with TcpSocket() as sock:
        sock.create()
        assert sock.fileno() >= 0
    assert sock.fileno() < 0


def test_round_trip(server):
    client = TcpSocket()
    client.create()
    client.connect("127.0.0.1", server.local_port)
    conn, peer = server.accept()
    try:
        assert peer.ip == "127.0.0.1"
        assert client.send("hello") == len(b"hello")
        assert conn.recv() == "hello"
        conn.send(b"back")
        assert client.recv() == "back"
        client.close()
        assert conn.recv() == ""
    finally:
        conn.close()
        client.close()


def test_bind_busy_port_raises():
    holder = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    holder.bind(("0.0.0.0", 0))
    holder.listen()
    port = holder.getsockname()[1]
    sock = TcpSocket()
    sock.create()
    try:
        with pytest.raises(SocketError) as info:
            sock.bind(port)
        assert info.value.code is ExitCode.BIND_ERROR
    finally:
        sock.close()
        holder.close()


def test_accept_without_socket_raises():
    with pytest.raises(OSError):
        TcpSocket().accept()


def test_connect_rejects_bad_address():
    sock = TcpSocket()
    sock.create()
    try:
        with pytest.raises(ValueError):
            sock.connect("not-an-ip", 80)
    finally:
        sock.close()