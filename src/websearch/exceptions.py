from __future__ import annotations


class UnknownEngineError(LookupError):
    def __init__(self, engine_id: str) -> None:
        self.engine_id = engine_id
        super().__init__(f"Unknown search engine: '{engine_id}'")


__all__ = [
    "UnknownEngineError",
]
