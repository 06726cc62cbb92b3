"""
tfstate_viewer/view/grouping.py

Groups resources into architecture-level buckets (load balancers, EKS, RDS,
S3, VPC, everything else). Rules are tried in order and the first match wins.

Exports:
    - GroupingRule (abstract base)
    - AlbRule, EksRule, RdsRule, S3Rule, VpcRule, DefaultRule
    - InstanceIndex
    - default_rules
    - group_resources
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence, Tuple

from tfstate_viewer.models.state import Resource
from tfstate_viewer.models.view import ResourceGroup


class InstanceIndex:
    """Maps instance addresses (and bare resource addresses) to their resource."""

    def __init__(self, resources: Iterable[Resource]) -> None:
        self._by_address: Dict[str, Resource] = {}
        for resource in resources:
            self._by_address.setdefault(resource.address, resource)
            for instance in resource.instances:
                self._by_address.setdefault(instance.address, resource)

    def lookup(self, address: str) -> Optional[Resource]:
        return self._by_address.get(address)


class GroupingRule(ABC):
    """A rule deciding whether a resource belongs to a group, and which one."""

    @abstractmethod
    def match(self, resource: Resource) -> bool:
        ...

    @abstractmethod
    def group_key(self, resource: Resource) -> str:
        ...

    @abstractmethod
    def group_name(self, resource: Resource) -> str:
        ...


class _TypeSetRule(GroupingRule):
    """Matches a fixed set of resource types into one fixed group."""

    types: FrozenSet[str] = frozenset()
    key: str = ""
    name: str = ""

    def match(self, resource: Resource) -> bool:
        return resource.type in self.types

    def group_key(self, resource: Resource) -> str:
        return self.key

    def group_name(self, resource: Resource) -> str:
        return self.name


class AlbRule(GroupingRule):
    """Groups an aws_lb with the listeners, rules and target groups that depend on it."""

    RELATED_TYPES = frozenset(
        {"aws_lb", "aws_lb_listener", "aws_lb_listener_rule", "aws_lb_target_group"}
    )

    def __init__(self, index: InstanceIndex) -> None:
        self._index = index

    def match(self, resource: Resource) -> bool:
        return resource.type in self.RELATED_TYPES

    def group_key(self, resource: Resource) -> str:
        if resource.type == "aws_lb":
            return resource.address

        for instance in resource.instances:
            for dep in instance.depends_on:
                parent = self._index.lookup(dep)
                if parent is not None and parent.type == "aws_lb":
                    return parent.address

        return resource.address

    def group_name(self, resource: Resource) -> str:
        return "Application Load Balancer"


class EksRule(_TypeSetRule):
    types = frozenset(
        {
            "aws_eks_cluster",
            "aws_autoscaling_group",
            "aws_launch_template",
            "aws_launch_configuration",
            "aws_security_group",
        }
    )
    key = "eks"
    name = "EKS Cluster(s)"


class RdsRule(_TypeSetRule):
    types = frozenset({"aws_db_instance"})
    key = "rds"
    name = "RDS Instances"


class S3Rule(_TypeSetRule):
    types = frozenset({"aws_s3_bucket"})
    key = "s3"
    name = "S3 Buckets"


class VpcRule(_TypeSetRule):
    types = frozenset({"aws_vpc", "aws_subnet"})
    key = "vpc"
    name = "VPC / Subnets"


class DefaultRule(GroupingRule):
    """Catch-all: one group per resource type."""

    def match(self, resource: Resource) -> bool:
        return True

    def group_key(self, resource: Resource) -> str:
        return resource.type

    def group_name(self, resource: Resource) -> str:
        return "Other Resources"


def default_rules(resources: Sequence[Resource]) -> List[GroupingRule]:
    """The built-in rule chain, ending with DefaultRule."""
    return [
        AlbRule(InstanceIndex(resources)),
        EksRule(),
        RdsRule(),
        S3Rule(),
        VpcRule(),
        DefaultRule(),
    ]


def group_resources(
    resources: Sequence[Resource],
    rules: Optional[Sequence[GroupingRule]] = None,
) -> Tuple[ResourceGroup, ...]:
    """Group resources by the first matching rule.

    Groups appear in order of their first resource; resources keep source order
    within each group. Resources matched by no rule are left out.

    Args:
        resources: Resources in source order.
        rules: Rule chain to apply. Defaults to default_rules(resources).

    Returns:
        Tuple[ResourceGroup, ...]: The non-empty groups.
    """
    chain = list(rules) if rules is not None else default_rules(resources)

    names: Dict[str, str] = {}
    members: Dict[str, List[Resource]] = {}
    for resource in resources:
        rule = next((r for r in chain if r.match(resource)), None)
        if rule is None:
            continue
        key = rule.group_key(resource)
        if key not in members:
            names[key] = rule.group_name(resource)
            members[key] = []
        members[key].append(resource)

    return tuple(
        ResourceGroup(key=key, name=names[key], resources=tuple(group))
        for key, group in members.items()
    )
