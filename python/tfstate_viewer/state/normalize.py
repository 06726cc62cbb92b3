"""
tfstate_viewer/state/normalize.py

Turns an arbitrary decoded JSON value into a NormalizedState.

`normalize` is total: for any JSON value (None, scalars, lists, malformed
objects) it returns a structurally valid NormalizedState. Each field is read
through an explicit coercion helper that either yields a value of the expected
shape or the field's default. Present-but-mistyped fields are logged at DEBUG.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple, Union

from tfstate_viewer.models.state import Instance, Module, NormalizedState, Resource

logger = logging.getLogger(__name__)

_MISSING = object()


def _mismatch(where: str, expected: str, value: Any) -> None:
    if value is not _MISSING and value is not None:
        logger.debug(
            "Ignoring %s: expected %s, got %s", where, expected, type(value).__name__
        )


def _get(obj: Dict[str, Any], key: str) -> Any:
    return obj.get(key, _MISSING)


def _as_str(value: Any, where: str) -> Optional[str]:
    if isinstance(value, str):
        return value
    _mismatch(where, "string", value)
    return None


def _as_number(value: Any, where: str) -> Optional[Union[int, float]]:
    # bool is an int subclass but never a valid number here
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value
    _mismatch(where, "number", value)
    return None


def _as_int(value: Any, where: str) -> Optional[int]:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    _mismatch(where, "integer", value)
    return None


def _as_list(value: Any, where: str) -> list:
    if isinstance(value, list):
        return value
    _mismatch(where, "array", value)
    return []


def _clone(value: Any) -> Any:
    """Copy nested dicts and lists using an explicit stack; depth is not bound
    by the recursion limit. Leaves are shared."""
    if not isinstance(value, (dict, list)):
        return value
    root: Any = {} if isinstance(value, dict) else []
    stack = [(value, root)]
    while stack:
        src, dst = stack.pop()
        items = src.items() if isinstance(src, dict) else enumerate(src)
        for key, item in items:
            child = item
            if isinstance(item, (dict, list)):
                child = {} if isinstance(item, dict) else []
                stack.append((item, child))
            if isinstance(dst, dict):
                dst[str(key)] = child
            else:
                dst.append(child)
    return root


def _as_mapping(value: Any, where: str) -> Optional[Dict[str, Any]]:
    """Copy an object so the result holds no reference into the raw input."""
    if isinstance(value, dict):
        return _clone(value)
    _mismatch(where, "object", value)
    return None


def _as_object(value: Any, where: str) -> Dict[str, Any]:
    """Like _as_mapping, but shallow: used to read fields off a raw object."""
    if isinstance(value, dict):
        return value
    _mismatch(where, "object", value)
    return {}


def _string_elements(values: list) -> Tuple[str, ...]:
    return tuple(v for v in values if isinstance(v, str))


def _index_key(value: Any) -> str:
    if value is _MISSING or value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _normalize_instance(raw: Any, resource_address: str, where: str) -> Instance:
    obj = _as_object(raw, where)
    index = _index_key(_get(obj, "index_key"))

    depends = _get(obj, "depends_on")
    if depends is _MISSING:
        depends = _get(obj, "dependencies")

    return Instance(
        attributes=_as_mapping(_get(obj, "attributes"), f"{where}.attributes") or {},
        index_key=index,
        depends_on=_string_elements(_as_list(depends, f"{where}.depends_on")),
        address=f"{resource_address}[{index}]" if index else resource_address,
    )


def _normalize_resource(raw: Any, where: str) -> Resource:
    obj = _as_object(raw, where)
    name = _as_str(_get(obj, "name"), f"{where}.name") or ""
    rtype = _as_str(_get(obj, "type"), f"{where}.type") or ""
    mode = _as_str(_get(obj, "mode"), f"{where}.mode") or ""
    provider = _as_str(_get(obj, "provider"), f"{where}.provider") or ""

    base = f"{rtype}.{name}"
    address = f"data.{base}" if mode == "data" else base

    raw_instances = _as_list(_get(obj, "instances"), f"{where}.instances")
    instances = tuple(
        _normalize_instance(inst, address, f"{where}.instances[{i}]")
        for i, inst in enumerate(raw_instances)
    )
    return Resource(
        name=name, type=rtype, mode=mode, provider=provider, instances=instances
    )


def _normalize_resources(value: Any, where: str) -> Tuple[Resource, ...]:
    return tuple(
        _normalize_resource(raw, f"{where}[{i}]")
        for i, raw in enumerate(_as_list(value, where))
    )


def _normalize_module(raw: Any, where: str) -> Module:
    obj = _as_object(raw, where)
    raw_path = _as_list(_get(obj, "path"), f"{where}.path")
    path = _string_elements(raw_path)
    if len(path) != len(raw_path):
        logger.debug(
            "Dropped %d non-string segment(s) from %s.path",
            len(raw_path) - len(path),
            where,
        )
    return Module(
        path=path,
        resources=_normalize_resources(_get(obj, "resources"), f"{where}.resources"),
    )


def normalize(raw: Any) -> NormalizedState:
    """Normalize an untrusted, already-decoded Terraform state document.

    Args:
        raw (Any): Any JSON value. Non-object input is treated as a document
            with every field absent.

    Returns:
        NormalizedState: Resources and modules in source order, never None;
            optional scalars and mappings set only when present and well-typed.
    """
    doc = _as_object(raw, "state")

    data_sources = _get(doc, "dataSources")
    if not isinstance(data_sources, dict):
        data_sources = _get(doc, "data_sources")

    return NormalizedState(
        terraform_version=_as_str(_get(doc, "terraform_version"), "terraform_version"),
        state_version=_as_number(_get(doc, "version"), "version"),
        serial=_as_int(_get(doc, "serial"), "serial"),
        lineage=_as_str(_get(doc, "lineage"), "lineage"),
        resources=_normalize_resources(_get(doc, "resources"), "resources"),
        modules=tuple(
            _normalize_module(raw_module, f"modules[{i}]")
            for i, raw_module in enumerate(
                _as_list(_get(doc, "modules"), "modules")
            )
        ),
        outputs=_as_mapping(_get(doc, "outputs"), "outputs"),
        variables=_as_mapping(_get(doc, "variables"), "variables"),
        data_sources=_as_mapping(data_sources, "data_sources"),
    )
