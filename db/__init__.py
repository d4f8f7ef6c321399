"""Data store and operations."""

from .json_store import IdGenerator, JsonStore, load_store

__all__ = ["IdGenerator", "JsonStore", "load_store"]
