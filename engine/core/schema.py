"""JSON schema definition for the room asset.

Defines the strict structure that ``game/assets/room.json`` (or any file
pointed to by TL_ROOM_FILE) must follow before it is turned into a catalog.
"""

ROOM_OBJECT_SCHEMA = {
    "type": "object",
    "required": ["id", "label", "description", "x", "y", "marker"],
    "properties": {
        "id": {"type": "string", "minLength": 1, "pattern": "^[A-Za-z0-9_]+$"},
        "label": {"type": "string", "minLength": 1},
        "description": {"type": "string", "minLength": 1},
        "x": {"type": "integer"},
        "y": {"type": "integer"},
        "marker": {"type": "string", "minLength": 1, "maxLength": 1},
    },
    "additionalProperties": False,
}

ROOM_SCHEMA = {
    "type": "object",
    "required": ["id", "name", "description", "grid_size", "objects"],
    "properties": {
        "id": {"type": "string", "minLength": 1},
        "name": {"type": "string", "minLength": 1},
        "description": {"type": "string"},
        "grid_size": {"type": "integer", "minimum": 1, "maximum": 26},
        "objects": {"type": "array", "minItems": 1, "items": ROOM_OBJECT_SCHEMA},
    },
    "additionalProperties": False,
}
