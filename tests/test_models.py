import pytest

from swagger_doc.errors import ModelNameConflict
from swagger_doc.generator.models import (
    collect_models,
    model_roots,
    render_definition,
    render_field,
    transform_models,
)
from swagger_doc.parser.base import Operation
from swagger_doc.schema.base import Anything, Nothing, Primitive, SequenceSchema, SetSchema, field, model

LONG = Primitive(type="integer", format="int64")
STRING = Primitive(type="string")
DOUBLE = Primitive(type="number", format="double")

LEG = model("LegOfPet", field("length", LONG, required=True))
PET = model(
    "Pet",
    field("id", LONG, required=True),
    field("name", STRING, required=True),
    field("leg", LEG, required=True),
    field("weight", DOUBLE),
)


class TestCollectModels:
    def test_nested_models_are_unfolded(self):
        assert collect_models([PET]) == {"Pet": PET, "LegOfPet": LEG}

    def test_models_inside_sequences_and_sets(self):
        roots = [SequenceSchema(items=PET), SetSchema(items=LEG)]
        assert set(collect_models(roots)) == {"Pet", "LegOfPet"}

    def test_anonymous_root_with_named_child(self):
        wrapper = model(None, field("pets", SequenceSchema(items=PET)))
        assert set(collect_models([wrapper])) == {"Pet", "LegOfPet"}

    def test_sentinels_and_primitives_are_skipped(self):
        assert collect_models([Anything, Nothing, LONG, model(None, field("x", LONG))]) == {}

    def test_same_model_twice_is_collected_once(self):
        assert collect_models([PET, PET, LEG]) == {"Pet": PET, "LegOfPet": LEG}

    def test_name_collision_is_an_error(self):
        other = model("Pet", field("id", STRING))
        with pytest.raises(ModelNameConflict) as e:
            collect_models([PET, other])
        assert e.value.name == "Pet"

    def test_does_not_share_state_between_calls(self):
        first = collect_models([PET])
        second = collect_models([model("Other")])
        assert set(first) == {"Pet", "LegOfPet"}
        assert set(second) == {"Other"}


class TestModelRoots:
    def test_only_body_and_response_schemas_are_roots(self):
        operation = Operation.model_validate(
            {
                "method": "post",
                "parameters": {"body": PET, "query": model("Query", field("q", STRING))},
                "responses": {
                    200: {"description": "ok", "schema": LEG},
                    204: {"description": "empty"},
                },
            }
        )
        assert model_roots([operation]) == [PET, LEG]


class TestRenderField:
    def test_primitive(self):
        assert render_field(LONG) == {"type": "integer", "format": "int64"}

    def test_named_schema_is_a_reference(self):
        assert render_field(PET) == {"$ref": "#/definitions/Pet"}

    def test_sequence_and_set_render_as_arrays(self):
        expected = {"type": "array", "items": {"$ref": "#/definitions/Pet"}}
        assert render_field(SequenceSchema(items=PET)) == expected
        assert render_field(SetSchema(items=PET)) == expected

    def test_inline_expands_named_schemas(self):
        assert render_field(LEG, inline=True) == {
            "type": "object",
            "properties": {"length": {"type": "integer", "format": "int64"}},
            "required": ["length"],
        }

    def test_anonymous_nested_map(self):
        assert render_field(model(None, field("x", LONG))) == {
            "type": "object",
            "properties": {"x": {"type": "integer", "format": "int64"}},
        }


class TestRenderDefinition:
    def test_named_model(self):
        assert render_definition(PET) == {
            "properties": {
                "id": {"type": "integer", "format": "int64"},
                "name": {"type": "string"},
                "leg": {"$ref": "#/definitions/LegOfPet"},
                "weight": {"type": "number", "format": "double"},
            },
            "required": ["id", "name", "leg"],
        }

    def test_required_is_omitted_when_empty(self):
        assert render_definition(model(None, field("code", LONG))) == {
            "properties": {"code": {"type": "integer", "format": "int64"}}
        }

    def test_wildcard_keys_add_no_properties(self):
        schema = model(None, field("x", LONG), open=True)
        assert list(render_definition(schema)["properties"]) == ["x"]

    def test_sequence_definition(self):
        assert render_definition(SequenceSchema(items=LONG)) == {
            "type": "array",
            "items": {"type": "integer", "format": "int64"},
        }


class TestTransformModels:
    def test_definitions_are_flat(self):
        definitions = transform_models([PET])
        assert set(definitions) == {"Pet", "LegOfPet"}
        assert definitions["Pet"]["properties"]["leg"] == {"$ref": "#/definitions/LegOfPet"}
        assert definitions["LegOfPet"] == {
            "properties": {"length": {"type": "integer", "format": "int64"}},
            "required": ["length"],
        }
