from typing import Any, Iterator, Union
from structlog import get_logger
from ._shape import is_container, is_dense_index, is_record_shaped, source_pairs

log = get_logger()

Scalar = Union[str, bytes, int, float, bool, None]
Value = Union[Scalar, "DynamicRecord", list[Union[Scalar, "DynamicRecord"]]]


class DynamicRecord:
    """
    A record that can be read and written both as attributes and as keys.

    Both styles, along with iteration and len(), go through one dict.
    Missing keys read as None instead of raising.

    With recursive=True, nested keyed structures become DynamicRecords and
    nested lists stay lists with their container elements wrapped.

    Keys that collide with method names (exists, keys, items, to_dict),
    the _data slot, or dunder names like __x__ are only reachable with
    record["key"].
    """

    __slots__ = ("_data",)
    _reserved_names: tuple[str, ...] = ("_data",)
    _key_prefix = "data"

    def __init__(self, source: Any = None, recursive: bool = False):
        object.__setattr__(self, "_data", {})
        pairs = source_pairs(source)
        # list-like sources get data1, data2, ... since indexes aren't valid names
        synthesize = is_dense_index(key for key, _ in pairs)
        if synthesize:
            log.debug("synthesized keys", count=len(pairs))

        for n, (key, value) in enumerate(pairs, start=1):
            name = f"{self._key_prefix}{n}" if synthesize else str(key)
            if recursive and is_container(value):
                value = self._normalize(value)
            self._set(name, value)

    def _normalize(self, value: Any) -> Value:
        if is_record_shaped(value):
            return type(self)(value, recursive=True)
        return [
            type(self)(item, recursive=True) if is_container(item) else item
            for _, item in source_pairs(value)
        ]

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._data!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DynamicRecord):
            return NotImplemented
        return dict(self._pairs()) == dict(other._pairs())

    __hash__ = None  # type: ignore

    def __dir__(self) -> list[str]:
        return [*super().__dir__(), *self.keys()]

    # copy & pickle go through these rather than setattr on the slots
    def __getstate__(self) -> dict[str, Value]:
        return dict(self._pairs())

    def __setstate__(self, state: dict[str, Value]) -> None:
        object.__setattr__(self, "_data", dict(state))

    # section: store ##########################################################

    def _get(self, name: str) -> Value:
        return self._data.get(name)

    def _set(self, name: str, value: Value) -> None:
        self._data[name] = value

    def _exists(self, name: str) -> bool:
        return self._data.get(name) is not None

    def _delete(self, name: str) -> None:
        self._data.pop(name, None)

    def _count(self) -> int:
        return len(self._data)

    def _pairs(self) -> Iterator[tuple[str, Value]]:
        yield from self._data.items()

    # section: attribute access ###############################################

    def __getattr__(self, name: str) -> Value:
        # only called when normal lookup fails
        if name in self._reserved_names or (
            name.startswith("__") and name.endswith("__")
        ):
            raise AttributeError(name)
        return self._get(name)

    def __setattr__(self, name: str, value: Value) -> None:
        # slots are only assigned in __init__, a field named _data is data
        self._set(name, value)

    def __delattr__(self, name: str) -> None:
        self._delete(name)

    def exists(self, name: str) -> bool:
        """
        True if name is set to something other than None.
        """
        return self._exists(name)

    # section: item access ####################################################

    def __getitem__(self, key: Any) -> Value:
        if key is None:
            return None
        return self._get(str(key))

    def __setitem__(self, key: Any, value: Value) -> None:
        if key is None:
            # record[None] = x has no name to store under, nothing is appended
            log.warning("keyed append unsupported", value=value)
            return
        self._set(str(key), value)

    def __contains__(self, key: Any) -> bool:
        if key is None:
            return False
        return self._exists(str(key))

    def __delitem__(self, key: Any) -> None:
        if key is not None:
            self._delete(str(key))

    # section: iteration & count ##############################################

    def __iter__(self) -> Iterator[tuple[str, Value]]:
        return self._pairs()

    def __len__(self) -> int:
        return self._count()

    def keys(self) -> list[str]:
        return [key for key, _ in self._pairs()]

    def items(self) -> list[tuple[str, Value]]:
        return list(self._pairs())

    def to_dict(self) -> dict[str, Any]:
        """
        Unwrap into plain dicts and lists, recursing through nested records.
        """
        return {key: _unwrap(value) for key, value in self}


def _unwrap(value: Value) -> Any:
    if isinstance(value, DynamicRecord):
        return value.to_dict()
    if isinstance(value, list):
        return [_unwrap(item) for item in value]
    return value
