"""
Shape classification for record sources and values.

Every value is one of three shapes:

record: a keyed structure (a mapping whose keys are not a dense index, or an
    object with named fields) that gets wrapped in a DynamicRecord
list: an ordered structure (list, tuple, or a mapping keyed 0..n-1) that
    stays a list but has its elements normalized
scalar: anything else, passed through untouched
"""
import dataclasses
import inspect
from collections.abc import Mapping
from enum import Enum
from typing import Any, Iterable
from pydantic import BaseModel


def _is_dynamic_record(value: Any) -> bool:
    from .record import DynamicRecord

    return isinstance(value, DynamicRecord)


def _is_plain_object(value: Any) -> bool:
    # instances carrying their own __dict__, but not code, classes or modules
    if inspect.isclass(value) or inspect.ismodule(value) or callable(value):
        return False
    if isinstance(value, (Enum, BaseException)):
        return False
    return hasattr(value, "__dict__")


def _is_field_object(value: Any) -> bool:
    if isinstance(value, BaseModel) or _is_plain_object(value):
        return True
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


def is_dense_index(keys: Iterable) -> bool:
    """
    True if keys are exactly 0, 1, ..., n-1 in order.

    The empty sequence is not a dense index.
    """
    keys = list(keys)
    if not keys:
        return False
    return keys == list(range(len(keys)))


def is_container(value: Any) -> bool:
    return (
        isinstance(value, (Mapping, list, tuple))
        or _is_field_object(value)
        or _is_dynamic_record(value)
    )


def is_list_shaped(value: Any) -> bool:
    if isinstance(value, (list, tuple)):
        return True
    if isinstance(value, Mapping):
        return is_dense_index(value.keys())
    return False


def is_record_shaped(value: Any) -> bool:
    return is_container(value) and not is_list_shaped(value)


def source_pairs(source: Any) -> list[tuple[Any, Any]]:
    """
    Coerce a construction source to its (key, value) pairs.

    Anything that isn't a container becomes a single entry list, so a scalar
    source ends up under the first synthesized key.
    """
    if source is None:
        return []
    if _is_dynamic_record(source):
        return list(source)
    if isinstance(source, Mapping):
        return list(source.items())
    if isinstance(source, (list, tuple)):
        return list(enumerate(source))
    if isinstance(source, BaseModel):
        return [(name, getattr(source, name)) for name in type(source).model_fields]
    if dataclasses.is_dataclass(source) and not isinstance(source, type):
        return [
            (field.name, getattr(source, field.name))
            for field in dataclasses.fields(source)
        ]
    if _is_plain_object(source):
        return list(vars(source).items())
    return [(0, source)]
