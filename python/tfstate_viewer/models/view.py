"""
tfstate_viewer/models/view.py

Pydantic models describing what the rendering layer should display for a
NormalizedState:

  - EmptySection: the canonical "no X found" marker.
  - ResourceEntry / InstanceEntry: a resource with its tooltip, label and
    detail text.
  - ModuleEntry: a module with its display path.
  - MappingSection: outputs, variables or data sources rendered as JSON text.
  - ResourceGroup: resources grouped by architecture rule.
  - ViewModel: the five sections plus header fields.
"""

from __future__ import annotations

from typing import Any, Dict, Literal, Optional, Tuple, Union

from pydantic import BaseModel

from tfstate_viewer.models.state import Module, Resource

SectionName = Literal["resources", "modules", "outputs", "variables", "data_sources"]


class EmptySection(BaseModel):
    """Marks a section that has nothing to show.

    Attributes:
        section: Which section this marker stands for.
        message: Text to display instead of the section body.
    """

    section: SectionName
    message: str

    class Config:
        frozen = True


class InstanceEntry(BaseModel):
    """Display data for a single resource instance."""

    address: str
    label: str
    details: str
    attributes_json: str

    class Config:
        frozen = True


class ResourceEntry(BaseModel):
    """A resource paired with its tooltip text and display label."""

    resource: Resource
    tooltip: str
    label: str
    details: str
    instances: Tuple[InstanceEntry, ...] = ()

    class Config:
        frozen = True


class ModuleEntry(BaseModel):
    """A module paired with its joined display path."""

    module: Module
    display_path: str
    resources: Tuple[ResourceEntry, ...] = ()

    class Config:
        frozen = True


class MappingSection(BaseModel):
    """An opaque mapping section, kept both as a mapping and as pretty JSON."""

    mapping: Dict[str, Any]
    json_text: str

    class Config:
        frozen = True


class ResourceGroup(BaseModel):
    """Resources that one grouping rule placed under the same key."""

    key: str
    name: str
    resources: Tuple[Resource, ...] = ()

    class Config:
        frozen = True


class ViewModel(BaseModel):
    """Everything the rendering layer needs for one state document.

    Each section is either a non-empty payload or an EmptySection marker.
    """

    terraform_version: Optional[str] = None
    state_version: Optional[Union[int, float]] = None
    resource_count: int = 0
    resources: Union[EmptySection, Tuple[ResourceEntry, ...]]
    modules: Union[EmptySection, Tuple[ModuleEntry, ...]]
    outputs: Union[EmptySection, MappingSection]
    variables: Union[EmptySection, MappingSection]
    data_sources: Union[EmptySection, MappingSection]
    groups: Tuple[ResourceGroup, ...] = ()

    class Config:
        frozen = True

    def is_empty(self, section: SectionName) -> bool:
        """Check whether the given section is an empty-state marker."""
        return isinstance(getattr(self, section), EmptySection)
