"""MemoryLane backend: cached event reads, ranked search and justified photo layouts."""

__version__ = "0.1.0"
