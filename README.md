# syslab

Small systems-programming pieces for POSIX systems, written with the
standard library only.

## Modules

- `syslab.log`: a `Logger` that builds `LogMessage` lines and hands them to
  an output strategy, either `ScreenStrategy` (standard output) or
  `FileStrategy` (appends to `./Log/my.log` by default). Each line starts with
  `[timestamp][LEVEL][file][pid][line]`. `Logger.log(level, *args)` tags the
  message with the caller's file and line and returns its text. A shared
  `logger` instance is provided.
- `syslab.inetaddr`: `InetAddr`, a frozen IPv4 address and port pair, with
  `from_sockaddr`, `any(port)` and `sockaddr()`.
- `syslab.dictionary`: `Dictionary`, loaded from a text file of
  `word:translation` lines (`parse_line` splits one line at its first colon).
  The first entry for a word wins; unknown words translate to `unknown`.
- `syslab.rbtree`: `RBTree`, a red-black tree with an optional key function,
  in-order and reverse iteration, `find`, `is_valid` and `height`; `RBSet`
  and `RBMap` keep keys unique on top of it.
- `syslab.thread`: `Thread`, a named thread (`thread-N` by default) with
  `start`, `stop`, `join` and `detach`.
- `syslab.threadpool`: `ThreadPool`, a fixed number of workers taking tasks
  in FIFO order. `stop()` refuses new tasks and lets workers finish the queue;
  `ThreadPool.instance()` returns a shared, started pool.
- `syslab.blockqueue`: `BlockQueue`, a bounded queue whose `put` blocks while
  full and `take` blocks while empty.
- `syslab.tcpsocket`: `TcpSocket` for listeners and connections, the
  `ExitCode` values, and `SocketError`, which carries the code of the failing
  set-up step.
- `syslab.udp_server`, `syslab.udp_client`: `UdpServer`, which answers each
  datagram with `handler(text, client)`, and `UdpClient`, which sends a line
  and returns the reply.
- `syslab.fifo`: `Fifo` (creates a named pipe on entry, removes it on exit)
  and `FifoEndpoint` (opens one end for reading or writing).
- `syslab.multiplex`: single-threaded TCP servers, `SelectServer`,
  `PollServer` and `EpollServer`, that accept clients and log what they send.
  `serve_once(timeout)` handles one round of readiness; `start()` loops until
  `stop()`.
- `syslab.process_pool`: `ProcessPool`, worker processes fed task codes from
  a `TaskRegistry` over pipes, round-robin.

## Installing

```
pip install .
```

With the test extra:

```
pip install ".[test]"
pytest
```

## Commands

UDP dictionary server on a port. It reads `./dictionary.txt` unless
`--dictionary PATH` is given, and keeps running with an empty dictionary if
the file cannot be read:

```
syslab-udp-server 8080
```

Client for it. Each line typed is sent and the reply is printed:

```
syslab-udp-client 127.0.0.1 8080
```

Named pipe pair, each taking an optional directory (default `.`). Start the
server first: it creates `myfifo` and writes each word you type into it. The
client prints what arrives until the server leaves:

```
syslab-fifo-server
syslab-fifo-client
```

Multiplexing TCP server that logs every message a client sends;
`--mode` is `select` (default), `poll` or `epoll`:

```
syslab-multiplex 9000 --mode poll
```

Process pool demonstration; `--size` sets the number of workers (default 5)
and `--rounds` the number of task codes sent (default 3):

```
syslab-process-pool
```

## Library use

```python
from syslab.rbtree import RBMap
from syslab.threadpool import ThreadPool

pool = ThreadPool(4)
pool.start()
pool.enqueue(lambda: print("working"))
pool.stop()
pool.join()

table = RBMap()
table.insert("b", 2)
table.insert("a", 1)
print(list(table.items()))
```

## Limitations

- No dictionary file is shipped; supply your own `word:translation` file to
  the UDP server.
- `Thread.stop()` only marks the thread as stopped; the function it runs goes
  on to completion.
- `EpollServer` needs a platform with `epoll` (Linux); `SelectServer` and
  `PollServer` accept at most 63 clients at a time.
- The multiplexing servers only log what they receive; they send no replies.