"""Storage contract, key codec and document store backends."""

from campusplanner.storage.base import ScheduleStore
from campusplanner.storage.json_store import JsonFileStore
from campusplanner.storage.keys import decode_key, encode_key
from campusplanner.storage.memory import InMemoryStore

__all__ = [
    "ScheduleStore",
    "InMemoryStore",
    "JsonFileStore",
    "decode_key",
    "encode_key",
]
