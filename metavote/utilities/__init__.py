from .serialization import json_ready

__all__ = [
    "json_ready",
]
