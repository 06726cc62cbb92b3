"""
tfstate_viewer/models/state.py

Holds the normalized Terraform state models produced by
tfstate_viewer.state.normalize:

  - Instance
  - Resource
  - Module
  - NormalizedState

All models are frozen. Attribute names are snake_case; serializing with
`model_dump(by_alias=True)` yields the camelCase keys the upload service returns
(terraformVersion, stateVersion, dataSources, ...).
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple, Union

from pydantic import BaseModel, Field, computed_field
from pydantic.alias_generators import to_camel

PATH_SEPARATOR = " > "


class _FrozenModel(BaseModel):
    class Config:
        frozen = True
        alias_generator = to_camel
        populate_by_name = True


class Instance(_FrozenModel):
    """One concrete object backing a resource.

    Attributes:
        attributes: Raw attribute values as found in the state, rendered verbatim.
        index_key: The count/for_each key, stringified. Empty for single instances.
        depends_on: Addresses this instance depends on.
        address: Fully qualified address, e.g. "aws_subnet.public[0]".
    """

    attributes: Dict[str, Any] = Field(default_factory=dict)
    index_key: str = ""
    depends_on: Tuple[str, ...] = ()
    address: str = ""


class Resource(_FrozenModel):
    """A declared resource and its instances, in state-file order."""

    name: str = ""
    type: str = ""
    mode: str = ""
    provider: str = ""
    instances: Tuple[Instance, ...] = ()

    @computed_field  # type: ignore[misc]
    @property
    def address(self) -> str:
        """Terraform address of the resource, without index."""
        base = f"{self.type}.{self.name}"
        return f"data.{base}" if self.mode == "data" else base


class Module(_FrozenModel):
    """A path-addressed group of resources."""

    path: Tuple[str, ...] = ()
    resources: Tuple[Resource, ...] = ()

    @computed_field(alias="displayPath")  # type: ignore[misc]
    @property
    def display_path(self) -> str:
        """Path segments joined for display. An empty path yields ''."""
        return PATH_SEPARATOR.join(self.path)


class NormalizedState(_FrozenModel):
    """A render-ready Terraform state.

    Collections are never None: a missing or mistyped `resources`/`modules`
    source field becomes an empty tuple. The opaque mappings (outputs,
    variables, data_sources) stay None when the source field is absent.

    Attributes:
        terraform_version: Version of Terraform that wrote the state.
        state_version: The state format version (source field "version").
        serial: Monotonic state serial.
        lineage: Unique lineage identifier of the state.
        resources: Root-level resources in declaration order.
        modules: Modules in declaration order.
        outputs: Output name -> raw output value.
        variables: Variable name -> raw value.
        data_sources: Data source name -> raw value.
    """

    terraform_version: Optional[str] = None
    state_version: Optional[Union[int, float]] = None
    serial: Optional[int] = None
    lineage: Optional[str] = None
    resources: Tuple[Resource, ...] = ()
    modules: Tuple[Module, ...] = ()
    outputs: Optional[Dict[str, Any]] = None
    variables: Optional[Dict[str, Any]] = None
    data_sources: Optional[Dict[str, Any]] = None

    def resource_count(self) -> int:
        """Count resources at the root level and inside every module."""
        return len(self.resources) + sum(len(m.resources) for m in self.modules)
