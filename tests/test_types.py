"""Tests for SchemaDocument, GeneratedArtifact and SourceBuilder."""

import dataclasses

import pytest

from lexgen.builder import (
    ConstantDeclaration,
    Expression,
    ImportDeclaration,
    LiteralValue,
    RawText,
    SourceBuilder,
)
from lexgen.exceptions import ValidationFailure
from lexgen.types import GeneratedArtifact, SchemaDocument


class TestSchemaDocument:
    """Test SchemaDocument."""

    def test_from_raw(self, raw_documents):
        document = SchemaDocument.from_raw(raw_documents[0])
        assert document.identifier == "com.example.getThing"
        assert document.body is raw_documents[0]

    @pytest.mark.parametrize("raw", [{}, {"id": None}, {"id": ""}, ["id"]])
    def test_from_raw_without_id(self, raw):
        with pytest.raises(ValidationFailure):
            SchemaDocument.from_raw(raw)

    def test_body_without_id(self):
        with pytest.raises(ValidationFailure, match="mismatched 'id'"):
            SchemaDocument("com.example.a", {"defs": {}})

    def test_body_with_other_id(self):
        with pytest.raises(ValidationFailure, match="mismatched 'id'") as exc_info:
            SchemaDocument("com.example.b", {"id": "x.y"})
        assert exc_info.value.context == {"identifier": "com.example.b", "id": "x.y"}

    def test_body_not_a_mapping(self):
        with pytest.raises(ValidationFailure, match="must be a mapping"):
            SchemaDocument("com.example.a", ["com.example.a"])

    def test_to_dict(self):
        document = SchemaDocument("a.b", {"id": "a.b"})
        assert document.to_dict() == {"identifier": "a.b", "body": {"id": "a.b"}}


class TestGeneratedArtifact:
    """Test GeneratedArtifact."""

    def test_immutable(self):
        artifact = GeneratedArtifact("/util.py", "x = 1\n")
        with pytest.raises(dataclasses.FrozenInstanceError):
            artifact.content = ""

    def test_to_dict(self):
        assert GeneratedArtifact("/util.py", "").to_dict() == {"path": "/util.py", "content": ""}


class TestSourceBuilder:
    """Test SourceBuilder."""

    def test_records_in_order(self):
        builder = SourceBuilder("/mod.py")
        builder.add_import("typing", ["Any"]).add_constant(
            "x", LiteralValue(1), annotation="int"
        ).add_text("y = x")

        assert builder.path == "/mod.py"
        assert len(builder) == 3
        assert builder.declarations == (
            ImportDeclaration("typing", ("Any",)),
            ConstantDeclaration("x", LiteralValue(1), "int"),
            RawText("y = x"),
        )

    def test_declarations_snapshot(self):
        builder = SourceBuilder("/mod.py")
        snapshot = builder.declarations
        builder.add_constant("x", Expression("1 + 1"))
        assert snapshot == ()
        assert len(builder.declarations) == 1
