"""
XML schema (XSD) validation built on lxml.

Documents can be checked three ways: ``is_matching_to_schema`` answers yes
or no, ``validate_xml_document`` raises on the first mismatch, and
``generate_validation_report`` collects every deviation into an XML report.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Union

from lxml import etree

from .error_handler import InvalidArgumentError, MissingArgumentError, SchemaMismatchError
from .file_utils import PathLike, validate_file

logger = logging.getLogger(__name__)

SCHEMA_EXTENSION = ".xsd"
DOCUMENT_EXTENSION = ".xml"

XmlDocument = Union[etree._ElementTree, etree._Element]


@dataclass(frozen=True)
class SchemaDefinition:
    """A compiled XML schema and the file it was loaded from."""
    source: Path
    validator: etree.XMLSchema


@dataclass(frozen=True)
class Deviation:
    """
    One mismatch between a document and its schema.

    ``line_position`` is the 1-based column when libxml2 reports one. Schema
    validity errors usually carry no column, and then it is 0.
    """
    index: int
    line_number: int
    line_position: int
    message: str

    def to_xml(self) -> etree._Element:
        return etree.Element(
            "Deviation",
            Index=str(self.index),
            LineNumber=str(self.line_number),
            LinePosition=str(self.line_position),
            Message=self.message,
        )


def load_xml_schema(schema_path: PathLike) -> SchemaDefinition:
    """
    Load and compile an XSD file.

    Raises:
        FileNotFoundError / IsADirectoryError: If the file is missing.
        InvalidExtensionError: If the file is not an .xsd file.
        InvalidArgumentError: If the file is not a valid schema.
    """
    validate_file(schema_path, SCHEMA_EXTENSION)

    try:
        validator = etree.XMLSchema(etree.parse(str(schema_path)))
    except (etree.XMLSchemaParseError, etree.XMLSyntaxError) as e:
        raise InvalidArgumentError(
            "schema_path", f"Provided XML schema is invalid: {schema_path}", schema_path
        ) from e

    logger.debug(f"Loaded XML schema from {schema_path}")
    return SchemaDefinition(source=Path(schema_path), validator=validator)


def load_xml_document(document_path: PathLike) -> etree._ElementTree:
    """
    Parse an XML file.

    Raises:
        FileNotFoundError / IsADirectoryError: If the file is missing.
        InvalidExtensionError: If the file is not an .xml file.
        InvalidArgumentError: If the file is not well-formed XML.
    """
    validate_file(document_path, DOCUMENT_EXTENSION)

    try:
        return etree.parse(str(document_path))
    except etree.XMLSyntaxError as e:
        raise InvalidArgumentError(
            "document_path", f"Provided XML document is malformed: {document_path}", document_path
        ) from e


def _run_validation(document: XmlDocument, schema: SchemaDefinition) -> bool:
    if document is None:
        raise MissingArgumentError("document", "Provided XML document is None")
    if schema is None:
        raise MissingArgumentError("schema", "Provided XML schema is None")

    return schema.validator.validate(document)


def collect_deviations(document: XmlDocument, schema: SchemaDefinition) -> List[Deviation]:
    """
    Validate ``document`` and return every deviation, in document order.

    Line positions are 0 whenever libxml2 does not know the column, which is
    the common case for schema validity errors.
    """
    if _run_validation(document, schema):
        return []

    return [
        Deviation(
            index=index,
            line_number=entry.line,
            line_position=entry.column,
            message=entry.message,
        )
        for index, entry in enumerate(schema.validator.error_log, start=1)
    ]


def is_matching_to_schema(document: XmlDocument, schema: SchemaDefinition) -> bool:
    """Return True if ``document`` is valid against ``schema``."""
    return _run_validation(document, schema)


def validate_xml_document(document: XmlDocument, schema: SchemaDefinition) -> None:
    """
    Raises:
        SchemaMismatchError: If ``document`` does not match ``schema``.
    """
    if not is_matching_to_schema(document, schema):
        message = f"XML document does not match the schema: {schema.source}"
        errors = list(schema.validator.error_log)
        if errors:
            message += f" (line {errors[0].line}: {errors[0].message})"
        raise SchemaMismatchError(message)


def generate_validation_report(document: XmlDocument, schema: SchemaDefinition) -> etree._Element:
    """
    Validate ``document`` and describe every deviation.

    Returns:
        A ``<Deviations Quantity="N">`` element with one ``<Deviation>``
        child per problem; ``Quantity="0"`` means the document is valid.
    """
    deviations = collect_deviations(document, schema)

    report = etree.Element("Deviations", Quantity=str(len(deviations)))
    for deviation in deviations:
        report.append(deviation.to_xml())

    logger.debug(f"Validated document against {schema.source}: {len(deviations)} deviations")
    return report
