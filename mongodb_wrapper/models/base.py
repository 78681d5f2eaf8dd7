"""
Shared types for the MongoDB wrapper.

Documents are plain dictionaries; the wrapper gives meaning to a single
field, ``uuid``, the application-level identifier it uses for duplicate
detection. Everything else is stored exactly as the caller provides it.
"""

from enum import Enum
from typing import Any, Dict, Mapping, Union

Document = Dict[str, Any]

# A mapping query, or a bare value used as shorthand for {"uuid": value}
Filter = Union[Mapping[str, Any], Any]

UUID_FIELD = "uuid"


class ConnectionState(str, Enum):
    """Connection lifecycle states of a MongoWrapper."""
    DISCONNECTED = "disconnected"
    CONNECTED = "connected"


class UpdateStrategy(str, Enum):
    """MongoDB update operators accepted as an update strategy."""
    SET = "$set"
    UNSET = "$unset"
    SET_ON_INSERT = "$setOnInsert"
    INC = "$inc"
    MUL = "$mul"
    MIN = "$min"
    MAX = "$max"
    RENAME = "$rename"
    CURRENT_DATE = "$currentDate"
    PUSH = "$push"
    ADD_TO_SET = "$addToSet"
    PULL = "$pull"
    PULL_ALL = "$pullAll"
    POP = "$pop"
