"""
Tests for message specification compilation.
"""

import dataclasses

import pytest

from orestes.message.specification import (
    MessageSpecification,
    compile_specification,
    external_specification,
)


class TestCompileSpecification:
    """Tests for compile_specification."""

    def test_literal_path(self):
        """A path without markers compiles to one fragment."""
        spec = compile_specification("GET", "/connect", [200])
        assert spec.path == ("/connect",)
        assert spec.path_arguments == 0
        assert spec.query == ()
        assert spec.dynamic is False

    def test_path_markers(self):
        """Each marker splits the path into one more fragment."""
        spec = compile_specification("GET", "/db/:bucket/:oid", [200])
        assert spec.path == ("/db/", "/", "")
        assert spec.path_arguments == 2

    def test_rest_capture(self):
        """A * marker marks the specification as dynamic."""
        spec = compile_specification("PUT", "/file/:bucket/*path", [200])
        assert spec.path == ("/file/", "/", "")
        assert spec.dynamic is True

    def test_query_names_keep_declaration_order(self):
        """Query names are extracted in order, values are ignored."""
        spec = compile_specification("GET", "/db/:bucket?start=0&count&sort", [200])
        assert spec.query == ("start", "count", "sort")
        assert spec.path == ("/db/", "")

    def test_status_and_method(self):
        """The method and accepted status codes are kept."""
        spec = compile_specification("POST", "/db/:bucket", [200, 201])
        assert spec.method == "POST"
        assert spec.status == frozenset({200, 201})

    def test_compilation_is_pure(self):
        """Compiling the same template twice yields equal specifications."""
        first = compile_specification("GET", "/db/:bucket?depth", [200])
        second = compile_specification("GET", "/db/:bucket?depth", [200])
        assert first == second

    def test_specification_is_immutable(self):
        """Compiled specifications cannot be modified."""
        spec = compile_specification("GET", "/db/:bucket", [200])
        with pytest.raises(dataclasses.FrozenInstanceError):
            spec.method = "POST"


class TestExternalSpecification:
    """Tests for external_specification."""

    def test_single_literal(self):
        """An absolute URL is kept as one literal, query names are explicit."""
        spec = external_specification(
            "OAUTH", "https://example.com/auth?response_type=code", ["client_id"], [200]
        )
        assert isinstance(spec, MessageSpecification)
        assert spec.path == ("https://example.com/auth?response_type=code",)
        assert spec.query == ("client_id",)
        assert spec.external is True
        assert spec.dynamic is False
