"""
tfstate_viewer/view/binder.py

Binds a NormalizedState to a ViewModel under a PresentationPolicy.

A section is empty when its field is absent or present but empty; both cases
produce the same EmptySection marker. That rule lives in `_is_empty` and is
shared by every section. Display order is the normalizer's order.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Optional, Sized, Tuple, Union

from tfstate_viewer.models.presentation import PresentationPolicy
from tfstate_viewer.models.state import Module, NormalizedState, Resource
from tfstate_viewer.models.view import (
    EmptySection,
    InstanceEntry,
    MappingSection,
    ModuleEntry,
    ResourceEntry,
    SectionName,
    ViewModel,
)
from tfstate_viewer.view.grouping import group_resources
from tfstate_viewer.view.labels import (
    instance_details,
    instance_label,
    module_path_label,
    resource_details,
    resource_label,
)


def _is_empty(value: Optional[Sized]) -> bool:
    return value is None or len(value) == 0


def _to_json(value: Any, indent: int) -> str:
    # default=str keeps non-JSON leaves (e.g. from programmatic callers) printable
    return json.dumps(value, indent=indent, default=str)


def _empty(section: SectionName, policy: PresentationPolicy) -> EmptySection:
    messages: Dict[SectionName, str] = {
        "resources": policy.no_resources_message,
        "modules": policy.no_modules_message,
        "outputs": policy.no_outputs_message,
        "variables": policy.no_variables_message,
        "data_sources": policy.no_data_sources_message,
    }
    return EmptySection(section=section, message=messages[section])


def _resource_entry(resource: Resource, policy: PresentationPolicy) -> ResourceEntry:
    return ResourceEntry(
        resource=resource,
        tooltip=policy.tooltip_for(resource.type),
        label=resource_label(resource),
        details=resource_details(resource),
        instances=tuple(
            InstanceEntry(
                address=instance.address,
                label=instance_label(instance),
                details=instance_details(instance),
                attributes_json=_to_json(instance.attributes, policy.json_indent),
            )
            for instance in resource.instances
        ),
    )


def _module_entry(module: Module, policy: PresentationPolicy) -> ModuleEntry:
    return ModuleEntry(
        module=module,
        display_path=module_path_label(module.path, policy.path_separator),
        resources=tuple(_resource_entry(r, policy) for r in module.resources),
    )


def _bind_resources(
    resources: Tuple[Resource, ...], policy: PresentationPolicy
) -> Union[EmptySection, Tuple[ResourceEntry, ...]]:
    if _is_empty(resources):
        return _empty("resources", policy)
    return tuple(_resource_entry(r, policy) for r in resources)


def _bind_modules(
    modules: Tuple[Module, ...], policy: PresentationPolicy
) -> Union[EmptySection, Tuple[ModuleEntry, ...]]:
    if _is_empty(modules):
        return _empty("modules", policy)
    return tuple(_module_entry(m, policy) for m in modules)


def _bind_mapping(
    section: SectionName,
    mapping: Optional[Dict[str, Any]],
    policy: PresentationPolicy,
) -> Union[EmptySection, MappingSection]:
    if _is_empty(mapping):
        return _empty(section, policy)
    return MappingSection(mapping=mapping, json_text=_to_json(mapping, policy.json_indent))


def bind(
    state: NormalizedState, policy: Optional[PresentationPolicy] = None
) -> ViewModel:
    """Describe what to display for each section of a normalized state.

    Args:
        state (NormalizedState): Output of `normalize`.
        policy (Optional[PresentationPolicy]): Empty-state texts, tooltip template,
            path separator and grouping switch. Defaults to PresentationPolicy().

    Returns:
        ViewModel: Deterministic for a given state and policy.
    """
    if policy is None:
        policy = PresentationPolicy()
    return ViewModel(
        terraform_version=state.terraform_version,
        state_version=state.state_version,
        resource_count=state.resource_count(),
        resources=_bind_resources(state.resources, policy),
        modules=_bind_modules(state.modules, policy),
        outputs=_bind_mapping("outputs", state.outputs, policy),
        variables=_bind_mapping("variables", state.variables, policy),
        data_sources=_bind_mapping("data_sources", state.data_sources, policy),
        groups=group_resources(state.resources) if policy.group_resources else (),
    )
