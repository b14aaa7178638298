[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "syslab"
version = "0.1.0"
description = "Systems programming building blocks: named pipes, process and thread pools, a blocking queue, a red-black tree, logging, and UDP/TCP servers using select, poll and epoll."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "fifo",
    "named-pipe",
    "process-pool",
    "thread-pool",
    "blocking-queue",
    "red-black-tree",
    "udp",
    "tcp",
    "select",
    "poll",
    "epoll",
    "logging",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: POSIX",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
syslab-udp-server = "syslab.udp_server:main"
syslab-udp-client = "syslab.udp_client:main"
syslab-fifo-server = "syslab.fifo:server_main"
syslab-fifo-client = "syslab.fifo:client_main"
syslab-multiplex = "syslab.multiplex:main"
syslab-process-pool = "syslab.process_pool:main"

[tool.hatch.build.targets.wheel]
packages = ["syslab"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
