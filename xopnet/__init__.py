"""TCP networking building blocks: socket helpers, channels, buffers, queues, logging and codec helpers."""

__version__ = "0.1.0"