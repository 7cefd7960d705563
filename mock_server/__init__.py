"""AI Mock Server: mock REST endpoints and simulated SSE training streams."""

__version__ = "1.0.0"
