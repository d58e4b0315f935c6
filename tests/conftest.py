"""Shared fixtures for the helperkit test suite."""

import pytest


BOOK_SCHEMA = """<?xml version="1.0" encoding="UTF-8"?>
<xs:schema xmlns:xs="http://www.w3.org/2001/XMLSchema">
  <xs:element name="library">
    <xs:complexType>
      <xs:sequence>
        <xs:element name="book" maxOccurs="unbounded">
          <xs:complexType>
            <xs:sequence>
              <xs:element name="title" type="xs:string"/>
              <xs:element name="year" type="xs:integer"/>
            </xs:sequence>
          </xs:complexType>
        </xs:element>
      </xs:sequence>
    </xs:complexType>
  </xs:element>
</xs:schema>
"""

VALID_DOCUMENT = """<library>
  <book><title>Dune</title><year>1965</year></book>
</library>
"""

# Two deviations, on lines 2 and 3.
INVALID_DOCUMENT = """<library>
  <book><title>Dune</title><year>nineteen</year></book>
  <book><title>Emma</title><year>soon</year></book>
</library>
"""


@pytest.fixture
def schema_path(tmp_path):
    path = tmp_path / "library.xsd"
    path.write_text(BOOK_SCHEMA)
    return path


@pytest.fixture
def valid_document_path(tmp_path):
    path = tmp_path / "valid.xml"
    path.write_text(VALID_DOCUMENT)
    return path


@pytest.fixture
def invalid_document_path(tmp_path):
    path = tmp_path / "invalid.xml"
    path.write_text(INVALID_DOCUMENT)
    return path
