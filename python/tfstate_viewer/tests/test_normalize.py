import copy

import pytest
from hypothesis import given, settings, strategies as st

from tfstate_viewer.models.state import Instance, NormalizedState
from tfstate_viewer.state.normalize import normalize
from tfstate_viewer.state.parse import parse_state

json_values = st.recursive(
    st.none()
    | st.booleans()
    | st.integers()
    | st.floats(allow_nan=False)
    | st.text(max_size=8),
    lambda children: st.lists(children, max_size=4)
    | st.dictionaries(st.text(max_size=8), children, max_size=4),
    max_leaves=30,
)

state_keys = st.sampled_from(
    [
        "terraform_version",
        "version",
        "serial",
        "lineage",
        "resources",
        "modules",
        "outputs",
        "variables",
        "dataSources",
        "data_sources",
        "name",
        "type",
        "instances",
        "attributes",
        "path",
        "index_key",
        "depends_on",
    ]
)

# documents shaped like state, with every field possibly of the wrong type
state_like = st.recursive(
    json_values,
    lambda children: st.lists(children, max_size=4)
    | st.dictionaries(state_keys, children, max_size=6),
    max_leaves=40,
)


@settings(deadline=None)
@given(raw=json_values)
def test_normalize_never_raises_for_any_json_value(raw):
    state = normalize(raw)

    assert isinstance(state, NormalizedState)
    assert isinstance(state.resources, tuple)
    assert isinstance(state.modules, tuple)


@settings(deadline=None)
@given(raw=state_like)
def test_normalize_never_raises_for_malformed_state(raw):
    state = normalize(raw)

    for resource in state.resources + tuple(
        r for m in state.modules for r in m.resources
    ):
        assert isinstance(resource.name, str)
        assert isinstance(resource.type, str)
        for instance in resource.instances:
            assert isinstance(instance.attributes, dict)
    for module in state.modules:
        assert all(isinstance(segment, str) for segment in module.path)


@pytest.mark.parametrize("raw", [None, 42, 1.5, "x", True, [], {}, [{"resources": []}]])
def test_non_state_values_give_all_defaults(raw):
    state = normalize(raw)

    assert state == NormalizedState()
    assert state.resources == ()
    assert state.modules == ()
    assert state.terraform_version is None
    assert state.outputs is None


def test_single_resource_with_one_instance():
    state = normalize(
        {
            "resources": [
                {
                    "name": "a",
                    "type": "aws_instance",
                    "instances": [{"attributes": {"id": "i-1"}}],
                }
            ]
        }
    )

    assert len(state.resources) == 1
    resource = state.resources[0]
    assert resource.name == "a"
    assert resource.type == "aws_instance"
    assert len(resource.instances) == 1
    assert resource.instances[0].attributes == {"id": "i-1"}


def test_module_display_path_is_joined():
    state = normalize({"modules": [{"path": ["root", "child"], "resources": []}]})

    assert len(state.modules) == 1
    assert state.modules[0].path == ("root", "child")
    assert state.modules[0].display_path == "root > child"


def test_empty_module_path_displays_as_empty_string():
    state = normalize({"modules": [{"resources": []}]})

    assert state.modules[0].path == ()
    assert state.modules[0].display_path == ""


def test_non_string_path_segments_are_dropped():
    state = normalize({"modules": [{"path": ["root", 3, None, {"x": 1}, "child"]}]})

    assert state.modules[0].path == ("root", "child")


def test_module_resources_are_normalized():
    state = normalize(
        {
            "modules": [
                {
                    "path": ["root"],
                    "resources": [{"name": 7, "type": "aws_s3_bucket", "instances": "nope"}],
                }
            ]
        }
    )

    resource = state.modules[0].resources[0]
    assert resource.name == ""
    assert resource.type == "aws_s3_bucket"
    assert resource.instances == ()


def test_resource_order_is_preserved():
    state = normalize(
        {"resources": [{"name": "B", "type": "t"}, {"name": "A", "type": "t"}]}
    )

    assert [r.name for r in state.resources] == ["B", "A"]


def test_mistyped_fields_fall_back_to_defaults():
    state = normalize(
        {
            "terraform_version": 1.5,
            "version": "4",
            "serial": True,
            "lineage": ["x"],
            "resources": {"not": "a list"},
            "modules": "nope",
            "outputs": [],
            "variables": "x",
            "dataSources": 3,
        }
    )

    assert state == NormalizedState()


def test_scalar_fields_are_read():
    state = normalize(
        {"terraform_version": "1.5.0", "version": 4, "serial": 12, "lineage": "abc-123"}
    )

    assert state.terraform_version == "1.5.0"
    assert state.state_version == 4
    assert state.serial == 12
    assert state.lineage == "abc-123"


def test_boolean_is_not_a_state_version():
    assert normalize({"version": False}).state_version is None


def test_instance_attributes_default_to_empty_mapping():
    state = normalize(
        {"resources": [{"instances": [{}, {"attributes": None}, {"attributes": [1]}, 5]}]}
    )

    assert [i.attributes for i in state.resources[0].instances] == [{}, {}, {}, {}]


def test_non_object_resource_keeps_its_position():
    state = normalize({"resources": ["junk", {"name": "real", "type": "t"}]})

    assert [r.name for r in state.resources] == ["", "real"]


def test_deep_attribute_values_pass_through_unmodified():
    attributes = {"tags": {"Name": "web"}, "ports": [80, 443], "nested": {"a": [{"b": None}]}}
    state = normalize({"resources": [{"instances": [{"attributes": attributes}]}]})

    assert state.resources[0].instances[0].attributes == attributes


def test_normalized_state_holds_no_reference_to_raw_input():
    raw = {
        "resources": [{"instances": [{"attributes": {"tags": {"Name": "web"}}}]}],
        "outputs": {"ip": {"value": "10.0.0.1"}},
    }
    snapshot = copy.deepcopy(raw)
    state = normalize(raw)

    raw["resources"][0]["instances"][0]["attributes"]["tags"]["Name"] = "changed"
    raw["outputs"]["ip"]["value"] = "changed"

    assert state.resources[0].instances[0].attributes == snapshot["resources"][0][
        "instances"
    ][0]["attributes"]
    assert state.outputs == snapshot["outputs"]


def _nesting_depth(value):
    depth = 0
    while isinstance(value, list) and value:
        depth += 1
        value = value[0]
    return depth + 1 if isinstance(value, list) else depth


def _nested_lists(depth):
    value = []
    for _ in range(depth - 1):
        value = [value]
    return value


def test_deeply_nested_attributes_survive_decode_and_normalize():
    nested = "[" * 700 + "]" * 700
    doc = '{"resources":[{"name":"a","type":"t","instances":[{"attributes":{"x":'
    doc += nested + "}}]}]}"

    state = parse_state(doc)

    assert state.resources[0].address == "t.a"
    assert _nesting_depth(state.resources[0].instances[0].attributes["x"]) == 700


def test_deeply_nested_outputs_survive_decode_and_normalize():
    doc = '{"outputs":{"deep":' + "[" * 700 + "]" * 700 + "}}"

    state = parse_state(doc)

    assert _nesting_depth(state.outputs["deep"]) == 700


def test_nesting_beyond_the_recursion_limit_is_copied():
    deep = _nested_lists(5000)
    raw = {"outputs": {"deep": deep}}

    state = normalize(raw)

    assert _nesting_depth(state.outputs["deep"]) == 5000
    assert state.outputs["deep"] is not deep


def test_opaque_mappings_are_kept_verbatim():
    outputs = {"vpc_id": {"value": "vpc-1", "type": "string", "sensitive": False}}
    state = normalize({"outputs": outputs, "variables": {}, "dataSources": {"ami": 1}})

    assert state.outputs == outputs
    assert state.variables == {}
    assert state.data_sources == {"ami": 1}


def test_data_sources_falls_back_to_snake_case_key():
    assert normalize({"data_sources": {"ami": 1}}).data_sources == {"ami": 1}
    assert normalize(
        {"dataSources": {"a": 1}, "data_sources": {"b": 2}}
    ).data_sources == {"a": 1}


def test_instance_address_and_index_key():
    state = normalize(
        {
            "resources": [
                {
                    "mode": "managed",
                    "type": "aws_subnet",
                    "name": "public",
                    "instances": [
                        {"index_key": 0, "attributes": {}},
                        {"index_key": "b", "attributes": {}},
                        {"attributes": {}},
                    ],
                },
                {
                    "mode": "data",
                    "type": "aws_ami",
                    "name": "ubuntu",
                    "instances": [{"attributes": {}}],
                },
            ]
        }
    )

    subnet, ami = state.resources
    assert subnet.address == "aws_subnet.public"
    assert [i.index_key for i in subnet.instances] == ["0", "b", ""]
    assert [i.address for i in subnet.instances] == [
        "aws_subnet.public[0]",
        "aws_subnet.public[b]",
        "aws_subnet.public",
    ]
    assert ami.address == "data.aws_ami.ubuntu"
    assert ami.instances[0].address == "data.aws_ami.ubuntu"


def test_depends_on_keeps_only_strings():
    state = normalize(
        {
            "resources": [
                {"instances": [{"depends_on": ["aws_vpc.main", 3, None]}]},
                {"instances": [{"dependencies": ["aws_lb.front"]}]},
            ]
        }
    )

    assert state.resources[0].instances[0].depends_on == ("aws_vpc.main",)
    assert state.resources[1].instances[0].depends_on == ("aws_lb.front",)


def test_normalized_state_is_frozen():
    state = normalize({"resources": []})

    with pytest.raises(Exception):
        state.terraform_version = "1.0"  # type: ignore[misc]


def test_camel_case_serialization():
    state = normalize(
        {
            "terraform_version": "1.5.0",
            "version": 4,
            "modules": [{"path": ["root"]}],
            "dataSources": {"a": 1},
        }
    )

    dumped = state.model_dump(mode="json", by_alias=True)
    assert dumped["terraformVersion"] == "1.5.0"
    assert dumped["stateVersion"] == 4
    assert dumped["dataSources"] == {"a": 1}
    assert dumped["resources"] == []
    assert dumped["modules"][0]["displayPath"] == "root"


def test_resource_count_includes_modules():
    state = normalize(
        {
            "resources": [{"name": "a"}],
            "modules": [{"path": ["root"], "resources": [{"name": "b"}, {"name": "c"}]}],
        }
    )

    assert state.resource_count() == 3
    assert normalize({}).resource_count() == 0


def test_instance_defaults():
    assert Instance() == Instance(attributes={}, index_key="", depends_on=(), address="")
