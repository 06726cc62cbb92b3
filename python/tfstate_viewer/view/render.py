"""
tfstate_viewer/view/render.py

Paints a ViewModel for terminals (`render_text`) or as JSON (`render_json`).
"""

from __future__ import annotations

import json
from typing import List, Union

from tfstate_viewer.models.view import EmptySection, MappingSection, ViewModel
from tfstate_viewer.view.labels import resource_details

_TITLE = "Terraform State Visualization"


def _indent(text: str, prefix: str) -> List[str]:
    return [prefix + line for line in text.splitlines()]


def _mapping_lines(title: str, section: Union[EmptySection, MappingSection]) -> List[str]:
    lines = ["", f"## {title}"]
    if isinstance(section, EmptySection):
        lines.append(section.message)
    else:
        lines.extend(section.json_text.splitlines())
    return lines


def render_text(view: ViewModel) -> str:
    """Render a ViewModel as plain text, one section after another."""
    lines = [
        _TITLE,
        "",
        f"Terraform Version: {view.terraform_version or ''}",
        f"State Version: {'' if view.state_version is None else view.state_version}",
        f"Resources: {view.resource_count}",
        "",
        "## Resources",
    ]

    if isinstance(view.resources, EmptySection):
        lines.append(view.resources.message)
    else:
        for entry in view.resources:
            lines.append(f"- {entry.label} ({entry.tooltip})")
            lines.extend(_indent(entry.details, "    "))
            for instance in entry.instances:
                lines.append(f"    * {instance.label}")
                lines.extend(_indent(instance.details, "        "))
                lines.append("        Attributes:")
                lines.extend(_indent(instance.attributes_json, "          "))

    lines.extend(["", "## Modules"])
    if isinstance(view.modules, EmptySection):
        lines.append(view.modules.message)
    else:
        for module in view.modules:
            lines.append(f"- {module.display_path}")
            for res in module.resources:
                lines.append(f"    {res.label} ({res.tooltip})")

    lines.extend(_mapping_lines("Outputs", view.outputs))
    lines.extend(_mapping_lines("Variables", view.variables))
    lines.extend(_mapping_lines("Data Sources", view.data_sources))

    if view.groups:
        lines.extend(["", "## Groups"])
        for group in view.groups:
            lines.append(
                f"- {group.name} [{group.key}] ({len(group.resources)} resources)"
            )
            for resource in group.resources:
                lines.extend(_indent(resource_details(resource), "    "))

    return "\n".join(lines) + "\n"


def render_json(view: ViewModel, indent: int = 2) -> str:
    """Render a ViewModel as JSON text."""
    return json.dumps(view.model_dump(mode="json"), indent=indent)
