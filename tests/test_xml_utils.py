"""
Tests for helperkit/xml_utils.py

Tests schema loading, boolean matching, fail-fast validation and the
deviation report.
"""

import pytest
from lxml import etree

from helperkit.error_handler import (
    InvalidArgumentError,
    InvalidExtensionError,
    MissingArgumentError,
    SchemaMismatchError,
)
from helperkit.xml_utils import (
    Deviation,
    SchemaDefinition,
    collect_deviations,
    generate_validation_report,
    is_matching_to_schema,
    load_xml_document,
    load_xml_schema,
    validate_xml_document,
)


@pytest.fixture
def schema(schema_path):
    return load_xml_schema(schema_path)


@pytest.fixture
def valid_document(valid_document_path):
    return load_xml_document(valid_document_path)


@pytest.fixture
def invalid_document(invalid_document_path):
    return load_xml_document(invalid_document_path)


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------

class TestLoading:
    def test_load_schema(self, schema, schema_path):
        assert isinstance(schema, SchemaDefinition)
        assert schema.source == schema_path

    def test_schema_needs_xsd_extension(self, schema_path, tmp_path):
        path = tmp_path / "library.xml"
        path.write_text(schema_path.read_text())
        with pytest.raises(InvalidExtensionError):
            load_xml_schema(path)

    def test_missing_schema(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_xml_schema(tmp_path / "missing.xsd")

    def test_invalid_schema(self, tmp_path):
        path = tmp_path / "broken.xsd"
        path.write_text('<xs:schema xmlns:xs="http://www.w3.org/2001/XMLSchema">'
                        '<xs:element name="a" type="xs:nope"/></xs:schema>')
        with pytest.raises(InvalidArgumentError) as exc_info:
            load_xml_schema(path)
        assert exc_info.value.__cause__ is not None

    def test_malformed_schema(self, tmp_path):
        path = tmp_path / "broken.xsd"
        path.write_text("<xs:schema")
        with pytest.raises(InvalidArgumentError):
            load_xml_schema(path)

    def test_malformed_document(self, tmp_path):
        path = tmp_path / "bad.xml"
        path.write_text("<library><book>")
        with pytest.raises(InvalidArgumentError):
            load_xml_document(path)


# ---------------------------------------------------------------------------
# Matching and fail-fast validation
# ---------------------------------------------------------------------------

class TestValidation:
    def test_valid_document_matches(self, schema, valid_document):
        assert is_matching_to_schema(valid_document, schema) is True
        validate_xml_document(valid_document, schema)

    def test_invalid_document_does_not_match(self, schema, invalid_document):
        assert is_matching_to_schema(invalid_document, schema) is False

    def test_validate_raises_with_schema_source(self, schema, invalid_document):
        with pytest.raises(SchemaMismatchError, match="library.xsd"):
            validate_xml_document(invalid_document, schema)

    def test_accepts_elements(self, schema, valid_document):
        assert is_matching_to_schema(valid_document.getroot(), schema)

    def test_none_arguments(self, schema, valid_document):
        with pytest.raises(MissingArgumentError):
            is_matching_to_schema(None, schema)
        with pytest.raises(MissingArgumentError):
            is_matching_to_schema(valid_document, None)


# ---------------------------------------------------------------------------
# Deviation report
# ---------------------------------------------------------------------------

class TestValidationReport:
    def test_valid_document_has_empty_report(self, schema, valid_document):
        report = generate_validation_report(valid_document, schema)
        assert report.tag == "Deviations"
        assert report.get("Quantity") == "0"
        assert len(report) == 0

    def test_collects_every_deviation(self, schema, invalid_document):
        report = generate_validation_report(invalid_document, schema)

        deviations = report.findall("Deviation")
        assert report.get("Quantity") == str(len(deviations))
        assert len(deviations) == 2
        assert [d.get("Index") for d in deviations] == ["1", "2"]
        assert [d.get("LineNumber") for d in deviations] == ["2", "3"]
        assert all("year" in d.get("Message") for d in deviations)
        assert all(d.get("LinePosition") is not None for d in deviations)

    def test_collect_deviations_returns_records(self, schema, invalid_document):
        deviations = collect_deviations(invalid_document, schema)
        assert all(isinstance(d, Deviation) for d in deviations)
        assert deviations[0].index == 1
        assert deviations[0].line_number == 2

    def test_unknown_column_is_reported_as_zero(self, schema, invalid_document):
        deviations = collect_deviations(invalid_document, schema)
        report = generate_validation_report(invalid_document, schema)

        assert all(isinstance(d.line_position, int) and d.line_position >= 0 for d in deviations)
        assert [d.get("LinePosition") for d in report.findall("Deviation")] == [
            str(d.line_position) for d in deviations
        ]

    def test_repeated_validation_is_independent(self, schema, valid_document, invalid_document):
        assert len(collect_deviations(invalid_document, schema)) == 2
        assert collect_deviations(valid_document, schema) == []
        assert len(collect_deviations(invalid_document, schema)) == 2

    def test_report_serializes(self, schema, invalid_document):
        text = etree.tostring(generate_validation_report(invalid_document, schema), encoding="unicode")
        assert text.startswith('<Deviations Quantity="2">')
