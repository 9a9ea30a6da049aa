from pathlib import Path

import pytest

from swagger_doc.errors import LoaderError
from swagger_doc.parser.base import HttpMethod
from swagger_doc.parser.detect import detect_format
from swagger_doc.parser.routes import load_python_object, parse_route_file, parse_routes
from swagger_doc.schema.base import Anything, MapSchema, Nothing, SequenceSchema, SetSchema

FIXTURES = Path(__file__).parent / "fixtures"


class TestDetectFormat:
    def test_detect_yaml(self):
        assert detect_format(str(FIXTURES / "petstore.yaml")) == "yaml"

    def test_detect_json_by_content(self, tmp_path):
        f = tmp_path / "routes.txt"
        f.write_text('{"paths": {}}')
        assert detect_format(str(f)) == "json"

    def test_detect_python_reference(self):
        assert detect_format("sample_api:document") == "python"

    def test_missing_file(self):
        with pytest.raises(FileNotFoundError):
            detect_format("no/such/routes.yaml")


class TestParseRouteFile:
    def test_parse_petstore_paths(self):
        doc = parse_route_file(FIXTURES / "petstore.yaml")
        assert list(doc.paths) == ["/api/:id", "/api/pets"]
        assert [op.method for op in doc.paths["/api/pets"]] == [HttpMethod.GET, HttpMethod.POST]

    def test_models_are_named(self):
        doc = parse_route_file(FIXTURES / "petstore.yaml")
        body = doc.paths["/api/pets"][1].parameters.body
        assert body.name == "Pet"
        leg = [f for f in body.fields if f.key == "leg"][0]
        assert leg.value.name == "LegOfPet"
        assert [(f.key, f.required) for f in body.fields] == [
            ("id", True),
            ("name", True),
            ("leg", True),
            ("weight", False),
        ]

    def test_sentinels_and_wildcards(self):
        doc = parse_route_file(FIXTURES / "petstore.yaml")
        params = doc.paths["/api/:id"][0].parameters
        assert params.body == Nothing
        assert params.header == Anything
        assert params.query.open is True
        assert [f.key for f in params.query.fields] == ["x", "y"]

    def test_response_keys(self):
        doc = parse_route_file(FIXTURES / "petstore.yaml")
        assert list(doc.paths["/api/:id"][0].responses) == [200, 404, "default"]

    def test_invalid_yaml(self, tmp_path):
        f = tmp_path / "bad.yaml"
        f.write_text("paths: [unclosed\n")
        with pytest.raises(LoaderError):
            parse_route_file(f)


class TestNotation:
    def _schema(self, node, models=None):
        doc = parse_routes(
            {
                "models": models or {},
                "paths": {"/a": [{"method": "get", "responses": {200: {"description": "ok", "schema": node}}}]},
            }
        )
        return doc.paths["/a"][0].responses[200].response_schema

    def test_sequence_set_and_enum(self):
        assert isinstance(self._schema(["integer"]), SequenceSchema)
        assert isinstance(self._schema({"$set": "string"}), SetSchema)
        assert self._schema({"$enum": ["a", "b"]}).enum == ("a", "b")

    def test_nested_anonymous_map(self):
        schema = self._schema({"page": {"size!": "int32"}})
        assert isinstance(schema, MapSchema)
        inner = schema.fields[0].value
        assert inner.fields[0].required is True
        assert inner.fields[0].value.format == "int32"

    def test_null_response_schema_is_dropped(self):
        assert self._schema(None) is None

    def test_null_parameter_location_is_skipped(self):
        doc = parse_routes({"paths": {"/a": [{"method": "get", "parameters": {"body": None}}]}})
        assert doc.paths["/a"][0].parameters.body is None

    def test_unknown_type(self):
        with pytest.raises(LoaderError):
            self._schema("Unicorn")

    def test_recursive_models(self):
        with pytest.raises(LoaderError):
            self._schema("A", models={"A": {"b": "B"}, "B": {"a": "A"}})

    def test_unknown_location(self):
        with pytest.raises(LoaderError):
            parse_routes({"paths": {"/a": [{"method": "get", "parameters": {"cookie": {"c": "string"}}}]}})

    def test_operations_must_be_a_list(self):
        with pytest.raises(LoaderError):
            parse_routes({"paths": {"/a": {"method": "get"}}})


class TestLoadPythonObject:
    def test_load_dict(self):
        doc = load_python_object("sample_api:document")
        assert doc.paths["/api/pets"][0].parameters.body.name == "Pet"

    def test_load_callable(self):
        doc = load_python_object("sample_api:build_document")
        assert "/api/:id" in doc.paths

    def test_missing_module(self):
        with pytest.raises(LoaderError):
            load_python_object("no_such_module_here:document")

    def test_missing_attribute(self):
        with pytest.raises(LoaderError):
            load_python_object("sample_api:nope")
