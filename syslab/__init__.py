"""Systems programming building blocks: named pipes, process and thread pools, a blocking queue, a red-black tree, logging, and UDP/TCP servers."""

__version__ = "0.1.0"