# tfstate_viewer/models/presentation.py

from __future__ import annotations

from typing import Any

import yaml
from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings


class PresentationPolicy(BaseSettings):
    """
    Pydantic settings controlling how a NormalizedState is bound for display.
    Fields map to environment variables prefixed with `TFVIEW_`,
    e.g. `TFVIEW_NO_RESOURCES_MESSAGE`, `TFVIEW_GROUP_RESOURCES`.
    """

    no_resources_message: str = "No resources found in the state file."
    no_modules_message: str = "No modules found in the state file."
    no_outputs_message: str = "No outputs found in the state file."
    no_variables_message: str = "No variables found in the state file."
    no_data_sources_message: str = "No data sources found in the state file."
    tooltip_template: str = "Type: {type}"
    path_separator: str = " > "
    json_indent: int = 2
    group_resources: bool = False

    class Config:
        env_prefix = "TFVIEW_"

    @field_validator("tooltip_template")
    @classmethod
    def validate_tooltip_template(cls, value: str) -> str:
        """Check that the template formats with only a `{type}` placeholder."""
        try:
            value.format(type="")
        except (KeyError, IndexError, ValueError) as exc:
            raise ValueError(
                f"tooltip_template may only reference {{type}}: {exc!r}"
            ) from exc
        return value

    def tooltip_for(self, resource_type: str) -> str:
        """Render the tooltip template for a resource type."""
        return self.tooltip_template.format(type=resource_type)

    @classmethod
    def from_yaml(cls, yaml_str: str) -> PresentationPolicy:
        """
        Load a policy from a YAML mapping. Keys not present keep their
        defaults (or environment overrides).

        Raises:
            ValueError: If the YAML is malformed, not a mapping, or fails validation.
        """
        try:
            data: Any = yaml.safe_load(yaml_str)
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid policy YAML: {exc}") from exc

        if data is None:
            data = {}
        if not isinstance(data, dict) or not all(isinstance(k, str) for k in data):
            raise ValueError("Policy YAML must be a mapping of setting names to values.")

        try:
            return cls(**data)
        except ValidationError as exc:
            raise ValueError(f"Invalid presentation policy: {exc}") from exc
