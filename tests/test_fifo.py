import io
import os
import stat
import sys
import threading
import time

import pytest

from syslab.fifo import Fifo, FifoEndpoint, client_main, server_main


def _writer(directory, texts):
    def run():
        with FifoEndpoint(directory) as endpoint:
            endpoint.open_for_write()
            for text in texts:
                endpoint.write(text)

    worker = threading.Thread(target=run, daemon=True)
    worker.start()
    return worker


def test_fifo_exists_only_inside_context(tmp_path):
    with Fifo(tmp_path) as fifo:
        assert stat.S_ISFIFO(os.stat(fifo.path).st_mode)
        assert fifo.path == tmp_path / "myfifo"
    assert not fifo.path.exists()


def test_fifo_refuses_regular_file(tmp_path):
    (tmp_path / "myfifo").write_text("plain")
    with pytest.raises(FileExistsError):
        with Fifo(tmp_path):
            pass


def test_write_then_read(tmp_path):
    with Fifo(tmp_path):
        worker = _writer(tmp_path, ["hello", " world"])
        with FifoEndpoint(tmp_path) as reader:
            reader.open_for_read()
            received = "".join(reader.read_messages())
        worker.join(5)
    assert received == "hello world"


def test_write_reports_byte_count(tmp_path):
    result = []
    with Fifo(tmp_path):
        def run():
            with FifoEndpoint(tmp_path) as endpoint:
                endpoint.open_for_write()
                result.append(endpoint.write("héllo"))

        worker = threading.Thread(target=run, daemon=True)
        worker.start()
        with FifoEndpoint(tmp_path) as reader:
            reader.open_for_read()
            received = "".join(reader.read_messages())
        worker.join(5)
    assert result == [len("héllo".encode("utf-8"))]
    assert received == "héllo"


def test_unopened_endpoint_raises(tmp_path):
    endpoint = FifoEndpoint(tmp_path)
    assert not endpoint.is_open
    with pytest.raises(RuntimeError):
        endpoint.write("x")
    with pytest.raises(RuntimeError):
        list(endpoint.read_messages())


def test_open_missing_fifo_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        FifoEndpoint(tmp_path, "absent").open_for_read()


def test_client_main_prints_messages(tmp_path, capsys):
    with Fifo(tmp_path):
        worker = _writer(tmp_path, ["ping"])
        assert client_main([str(tmp_path)]) == 0
        worker.join(5)
    out = capsys.readouterr().out
    assert "received: ping" in out


def test_client_main_without_fifo_fails(tmp_path):
    assert client_main([str(tmp_path)]) == 1


def test_server_main_writes_words(tmp_path, monkeypatch):
    monkeypatch.setattr(sys, "stdin", io.StringIO("alpha beta\n"))
    codes = []
    worker = threading.Thread(target=lambda: codes.append(server_main([str(tmp_path)])),
                              daemon=True)
    worker.start()
    path = tmp_path / "myfifo"
    deadline = time.monotonic() + 5
    while not path.exists() and time.monotonic() < deadline:
        time.sleep(0.01)
    with FifoEndpoint(tmp_path) as reader:
        reader.open_for_read()
        received = "".join(reader.read_messages())
    worker.join(5)
    assert received == "alphabeta"
    assert codes == [0]
    assert not path.exists()