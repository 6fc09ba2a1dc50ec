"""Login gate for the RocketMQ dashboard."""

__version__ = "0.1.0"
