"""
tfstate_viewer/view/labels.py

Display labels and detail text for resources, instances and module paths.
Labels prefer human-meaningful attributes (tags.Name, name, arn) and fall back
to Terraform addresses.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Optional

from tfstate_viewer.models.state import PATH_SEPARATOR, Instance, Resource


def _name_tag(attributes: Dict[str, Any]) -> Optional[Any]:
    tags = attributes.get("tags")
    if isinstance(tags, dict):
        return tags.get("Name")
    return None


def _str_attr(attributes: Dict[str, Any], key: str) -> Optional[str]:
    value = attributes.get(key)
    return value if isinstance(value, str) else None


def resource_label(resource: Resource) -> str:
    """Label a resource as "<type> : <name>" using the first instance that has
    a string tags.Name, name, or arn attribute; otherwise use its address."""
    for instance in resource.instances:
        attrs = instance.attributes
        name_tag = _name_tag(attrs)
        if isinstance(name_tag, str):
            return f"{resource.type} : {name_tag}"
        for key in ("name", "arn"):
            value = _str_attr(attrs, key)
            if value is not None:
                return f"{resource.type} : {value}"
    return resource.address


def instance_label(instance: Instance) -> str:
    """Label an instance by arn, then name, then address."""
    return (
        _str_attr(instance.attributes, "arn")
        or _str_attr(instance.attributes, "name")
        or instance.address
    )


def module_path_label(path: Iterable[str], separator: str = PATH_SEPARATOR) -> str:
    """Join module path segments for display. An empty path gives ''."""
    return separator.join(path)


def resource_details(resource: Resource) -> str:
    """Multi-line detail text for a resource."""
    lines = [f"Resource: {resource_label(resource)}", f"Type: {resource.type}"]

    # first instance wins for ARN and Name tag
    attrs = resource.instances[0].attributes if resource.instances else {}
    arn = _str_attr(attrs, "arn")
    if arn is not None:
        lines.append(f"ARN: {arn}")
    name_tag = _name_tag(attrs)
    if name_tag is not None:
        lines.append(f"Name Tag: {name_tag}")

    lines.append(f"Instances: {len(resource.instances)}")
    return "\n".join(lines)


def instance_details(instance: Instance) -> str:
    """Multi-line detail text for an instance."""
    return f"Instance: {instance.address}\nIndex: {instance.index_key}"
