"""JSON documents with a movable cursor, dotted keys and array node packs.

Dotted keys such as ``"camera.position"`` walk through nested objects for
the ``set_*``/``get_*`` value accessors and ``set_array``. The array and
section helpers look keys up directly in the current object.
"""

from __future__ import annotations

import json
import uuid
from enum import Enum
from os import PathLike
from pathlib import Path
from typing import Any

import numpy as np

from amarillo.color import Color

StrPath = str | PathLike
_NIL_UUID = uuid.UUID(int=0)


class ValueKind(Enum):
    """The kinds of value a JSON document can hold."""

    NULL = "null"
    STRING = "string"
    NUMBER = "number"
    OBJECT = "object"
    ARRAY = "array"
    BOOLEAN = "boolean"


def _kind_of(value: Any) -> ValueKind | None:
    if value is None:
        return ValueKind.NULL
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, (int, float)):
        return ValueKind.NUMBER
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, dict):
        return ValueKind.OBJECT
    if isinstance(value, list):
        return ValueKind.ARRAY
    return None


_MISSING = object()


def _dotget(obj: dict | None, key: str) -> Any:
    """Value at a dotted key, or ``_MISSING``."""
    current: Any = obj
    for part in key.split("."):
        if not isinstance(current, dict) or part not in current:
            return _MISSING
        current = current[part]
    return current


def _dotset(obj: dict, key: str, value: Any) -> None:
    """Store ``value`` at a dotted key, creating or replacing objects on the way."""
    *parents, last = key.split(".")
    current = obj
    for part in parents:
        child = current.get(part)
        if not isinstance(child, dict):
            child = {}
            current[part] = child
        current = child
    current[last] = value


def _plain_array(obj: dict | None, key: str) -> list | None:
    if not isinstance(obj, dict):
        return None
    value = obj.get(key)
    return value if isinstance(value, list) else None


def _number_at(array: list | None, index: int) -> float:
    if array is None or not 0 <= index < len(array):
        return 0.0
    value = array[index]
    return float(value) if _kind_of(value) is ValueKind.NUMBER else 0.0


class JsonArrayPack:
    """A cursor over the object nodes of one JSON array."""

    def __init__(self, array: list, value: dict | None) -> None:
        self.array = array
        self.value = value
        self.index = 0

    def __len__(self) -> int:
        return len(self.array)

    def _node(self) -> dict:
        if not isinstance(self.value, dict):
            raise ValueError("the current array node is not an object")
        return self.value

    def _fresh_array(self, name: str) -> list:
        node = self._node()
        existing = _dotget(node, name)
        if isinstance(existing, list):
            existing.clear()
            return existing
        created: list = []
        _dotset(node, name, created)
        return created

    def set_number(self, name: str, number: float) -> None:
        """Store a number on the current node, adding the node to the array once."""
        node = self._node()
        _dotset(node, name, float(number))
        if not any(item is node for item in self.array):
            self.array.append(node)

    def get_number(self, name: str) -> float:
        """Number on the current node, 0 when missing."""
        value = _dotget(self.value, name)
        return float(value) if _kind_of(value) is ValueKind.NUMBER else 0.0

    def set_boolean(self, name: str, value: bool) -> None:
        """Store a boolean on the current node."""
        _dotset(self._node(), name, bool(value))

    def get_boolean(self, name: str) -> bool:
        """Boolean on the current node, False when missing."""
        value = _dotget(self.value, name)
        return value if isinstance(value, bool) else False

    def set_color(self, name: str, color: Color) -> None:
        """Store a colour as [r, g, b, a]."""
        self._fresh_array(name).extend(float(c) for c in color.as_tuple())

    def get_color(self, name: str) -> Color:
        """Colour stored by ``set_color``; missing channels read as 0."""
        array = _dotget(self.value, name)
        array = array if isinstance(array, list) else None
        return Color(*(_number_at(array, i) for i in range(4)))

    def set_float3(self, name: str, numbers) -> None:
        """Store three numbers as an array."""
        values = np.asarray(numbers, dtype=float).reshape(3)
        self._fresh_array(name).extend(float(v) for v in values)

    def get_float3(self, name: str) -> np.ndarray:
        """Three numbers stored by ``set_float3``."""
        array = _dotget(self.value, name)
        array = array if isinstance(array, list) else None
        return np.array([_number_at(array, i) for i in range(3)])

    def set_quat(self, name: str, quat) -> None:
        """Store a quaternion as [x, y, z, w]."""
        values = np.asarray(quat, dtype=float).reshape(4)
        self._fresh_array(name).extend(float(v) for v in values)

    def get_quat(self, name: str) -> np.ndarray:
        """Quaternion stored by ``set_quat`` in (x, y, z, w) order."""
        array = _dotget(self.value, name)
        array = array if isinstance(array, list) else None
        return np.array([_number_at(array, i) for i in range(4)])

    def set_another_node(self) -> None:
        """Append a new empty node and make it current."""
        self.value = {}
        self.array.append(self.value)

    def get_another_node(self) -> bool:
        """Advance to the next node; False when there is none."""
        self.index += 1
        if self.index < len(self.array):
            self.value = self.array[self.index]
            return True
        return False

    def get_first_node(self) -> None:
        """Go back to the first node."""
        self.get_node(0)

    def get_node(self, index: int) -> None:
        """Make the node at ``index`` current; out of range leaves no current node."""
        self.index = index
        self.value = self.array[index] if 0 <= index < len(self.array) else None

    def set_string(self, name: str, value: str) -> None:
        """Store a string on the current node."""
        _dotset(self._node(), name, str(value))

    def get_string(self, name: str) -> str | None:
        """String on the current node, None when missing."""
        value = _dotget(self.value, name)
        return value if isinstance(value, str) else None

    def init_new_array(self, name: str) -> "JsonArrayPack":
        """Create an array on the current node and return a pack for it."""
        created: list = []
        _dotset(self._node(), name, created)
        return JsonArrayPack(created, {})

    def get_array(self, name: str) -> "JsonArrayPack":
        """Pack over an array stored on the current node."""
        array = _dotget(self.value, name)
        if not isinstance(array, list):
            raise KeyError(name)
        return JsonArrayPack(array, array[0] if array else None)


class JsonDoc:
    """A JSON object document with a cursor that can move into sections."""

    def __init__(self, value: dict | None = None, path: StrPath = "") -> None:
        self.value: dict = {} if value is None else value
        self.object: dict = self.value
        self.root: dict = self.value
        self.path = str(path)
        self._save_value: dict | None = None

    # -- plain values -------------------------------------------------
    def set_string(self, key: str, value: str) -> None:
        _dotset(self.object, key, str(value))

    def set_bool(self, key: str, value: bool) -> None:
        _dotset(self.object, key, bool(value))

    def set_number(self, key: str, value: float) -> None:
        _dotset(self.object, key, float(value))

    def set_number3(self, key: str, value) -> None:
        """Store (x, y, z) as an array."""
        x, y, z = np.asarray(value, dtype=float).reshape(3)
        self.set_array(key)
        for number in (x, y, z):
            self.add_number_to_array(key, number)

    def set_number4(self, key: str, value) -> None:
        """Store (x, y, z, w) as an array in the order x, y, w, z."""
        x, y, z, w = np.asarray(value, dtype=float).reshape(4)
        self.set_array(key)
        for number in (x, y, w, z):
            self.add_number_to_array(key, number)

    def set_uid(self, key: str, value: uuid.UUID) -> None:
        self.set_string(key, str(value))

    def get_string(self, key: str, default: str = "") -> str:
        if self.find_value(key, ValueKind.STRING):
            return _dotget(self.object, key)
        return default

    def get_bool(self, key: str, default: bool = False) -> bool:
        if self.find_value(key, ValueKind.BOOLEAN):
            return _dotget(self.object, key)
        return default

    def get_number(self, key: str, default: float = 0.0) -> float:
        if self.find_value(key, ValueKind.NUMBER):
            return float(_dotget(self.object, key))
        return default

    def get_number3(self, key: str, default=(0.0, 0.0, 0.0)) -> np.ndarray:
        if _plain_array(self.object, key) is None:
            return np.asarray(default, dtype=float).reshape(3).copy()
        return np.array([self.get_number_from_array(key, i) for i in range(3)])

    def get_number4(self, key: str, default=(0.0, 0.0, 0.0, 0.0)) -> np.ndarray:
        """Read (x, y, z, w) stored by ``set_number4``."""
        if _plain_array(self.object, key) is None:
            return np.asarray(default, dtype=float).reshape(4).copy()
        x, y, w, z = (self.get_number_from_array(key, i) for i in range(4))
        return np.array([x, y, z, w])

    def get_uid(self, key: str) -> uuid.UUID:
        """UUID stored at ``key``; the nil UUID when missing or malformed."""
        try:
            return uuid.UUID(self.get_string(key))
        except ValueError:
            return _NIL_UUID

    # -- arrays -------------------------------------------------------
    def set_array(self, key: str) -> None:
        _dotset(self.object, key, [])

    def clear_array(self, key: str) -> None:
        array = _plain_array(self.object, key)
        if array is not None:
            array.clear()

    def remove_array_index(self, key: str, index: int) -> None:
        array = _plain_array(self.object, key)
        if array is not None and 0 <= index < len(array):
            del array[index]

    def add_string_to_array(self, key: str, value: str) -> None:
        array = _plain_array(self.object, key)
        if array is not None:
            array.append(str(value))

    def add_bool_to_array(self, key: str, value: bool) -> None:
        array = _plain_array(self.object, key)
        if array is not None:
            array.append(bool(value))

    def add_number_to_array(self, key: str, value: float) -> None:
        array = _plain_array(self.object, key)
        if array is not None:
            array.append(float(value))

    def add_section_to_array(self, key: str) -> None:
        array = _plain_array(self.object, key)
        if array is not None:
            array.append({})

    def move_to_section_from_array(self, key: str, index: int) -> bool:
        """Move the cursor into the object at ``index`` of an array."""
        array = _plain_array(self.object, key)
        if array is None or not 0 <= index < len(array) or not isinstance(array[index], dict):
            return False
        self.object = array[index]
        return True

    def get_array_count(self, key: str) -> int:
        array = _plain_array(self.object, key)
        return 0 if array is None else len(array)

    def get_string_from_array(self, key: str, index: int) -> str | None:
        if self.find_array_value(key, index, ValueKind.STRING):
            return self.object[key][index]
        return None

    def get_bool_from_array(self, key: str, index: int) -> bool:
        if self.find_array_value(key, index, ValueKind.BOOLEAN):
            return self.object[key][index]
        return False

    def get_number_from_array(self, key: str, index: int) -> float:
        if self.find_array_value(key, index, ValueKind.NUMBER):
            return float(self.object[key][index])
        return 0.0

    # -- sections -----------------------------------------------------
    def move_to_section(self, key: str) -> bool:
        section = self.object.get(key)
        if isinstance(section, dict):
            self.object = section
            return True
        return False

    def remove_section(self, key: str) -> None:
        self.object.pop(key, None)

    def move_to_root(self) -> None:
        self.object = self.root

    def add_section(self, key: str) -> None:
        self.object[key] = {}

    def get_json_node(self) -> "JsonDoc":
        """A document sharing this data whose root is the current section."""
        node = JsonDoc(self.value, self.path)
        node.object = self.object
        node.root = self.object
        return node

    def clear(self) -> None:
        """Drop every value and start again from an empty object."""
        self.value = {}
        self.object = self.value
        self.root = self.value

    def find_value(self, key: str, kind: ValueKind) -> bool:
        """True when the dotted ``key`` holds a value of ``kind``."""
        value = _dotget(self.object, key)
        return value is not _MISSING and _kind_of(value) is kind

    def find_array_value(self, key: str, index: int, kind: ValueKind) -> bool:
        """True when item ``index`` of array ``key`` is of ``kind``."""
        array = _plain_array(self.object, key)
        if array is None or not 0 <= index < len(array):
            return False
        return _kind_of(array[index]) is kind

    def get_array(self, name: str) -> JsonArrayPack:
        """Pack over a non-empty array at dotted ``name``, starting at its first node."""
        array = _dotget(self.object, name)
        if not isinstance(array, list) or not array:
            raise KeyError(name)
        return JsonArrayPack(array, array[0])

    # -- saving into the file at ``path`` ----------------------------
    def start_save(self) -> None:
        """Load the file at ``path`` so arrays can be added to it."""
        loaded = json.loads(Path(self.path).read_text(encoding="utf-8"))
        if not isinstance(loaded, dict):
            raise ValueError(f"{self.path} does not hold a JSON object")
        self._save_value = loaded

    def finish_save(self) -> None:
        """Write the loaded file back to ``path`` and forget it."""
        if self._save_value is None:
            raise RuntimeError("start_save was not called")
        Path(self.path).write_text(json.dumps(self._save_value, indent=4), encoding="utf-8")
        self._save_value = None

    def init_new_array(self, name: str) -> JsonArrayPack:
        """Create an array in the file being saved and return a pack for it."""
        if self._save_value is None:
            raise RuntimeError("start_save was not called")
        created: list = []
        _dotset(self._save_value, name, created)
        return JsonArrayPack(created, {})


def load_json(path: StrPath) -> JsonDoc:
    """Read a JSON object document from ``path``."""
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"{path} does not hold a JSON object")
    return JsonDoc(data, path)


def create_json() -> JsonDoc:
    """A new empty document."""
    return JsonDoc()


def save_json(doc: JsonDoc, path: StrPath) -> None:
    """Write ``doc`` to ``path`` as indented JSON."""
    Path(path).write_text(json.dumps(doc.value, indent=4), encoding="utf-8")