"""
Serialization of exceptions and their cause chains.

``ExceptionNode`` is a plain recursive record: each node describes one
exception and optionally holds the node of the exception that caused it.
The chain ends at the first exception without a cause.
"""

import logging
import re
import traceback
from dataclasses import dataclass
from typing import Any, Dict, Optional

from lxml import etree

from .error_handler import InvalidArgumentError, MissingArgumentError

logger = logging.getLogger(__name__)

UNKNOWN = "Unknown"
DEFAULT_ELEMENT_NAME = "Exception"
INNER_ELEMENT_NAME = "InnerException"

# Anything outside the XML 1.0 character range.
_INVALID_XML_CHARS = re.compile(
    "[^\u0009\u000a\u000d\u0020-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]"
)


def _type_name(exc: BaseException) -> str:
    cls = type(exc)
    return f"{cls.__module__}.{cls.__qualname__}"


def _xml_text(text: str) -> str:
    """Escape characters lxml refuses in attributes as ``\\xNN`` or ``\\uNNNN``."""
    def escape(match):
        code = ord(match.group())
        return f"\\x{code:02x}" if code < 0x100 else f"\\u{code:04x}"
    return _INVALID_XML_CHARS.sub(escape, text)


def _cause_of(exc: BaseException) -> Optional[BaseException]:
    if exc.__cause__ is not None:
        return exc.__cause__
    if exc.__suppress_context__:
        return None
    return exc.__context__


@dataclass
class ExceptionNode:
    """One exception in a cause chain."""
    type_name: str
    message: str
    application: str = UNKNOWN
    method: str = UNKNOWN
    stack_trace: str = ""
    inner: Optional["ExceptionNode"] = None

    @classmethod
    def from_exception(cls, exc: BaseException) -> "ExceptionNode":
        """
        Build the node chain for ``exc``.

        Follows ``__cause__`` first, then ``__context__`` unless it was
        suppressed with ``raise ... from None``. An exception that shows up
        twice ends the chain.
        """
        if exc is None:
            raise MissingArgumentError("exc", "Provided exception is None")

        nodes = []
        seen = set()
        current: Optional[BaseException] = exc
        while current is not None and id(current) not in seen:
            seen.add(id(current))
            nodes.append(cls._describe(current))
            current = _cause_of(current)

        for outer, inner in zip(nodes, nodes[1:]):
            outer.inner = inner
        return nodes[0]

    @classmethod
    def _describe(cls, exc: BaseException) -> "ExceptionNode":
        tb = exc.__traceback__
        if tb is None:
            return cls(type_name=_type_name(exc), message=str(exc))

        # The innermost frame is where the exception was raised.
        while tb.tb_next is not None:
            tb = tb.tb_next
        frame = tb.tb_frame

        return cls(
            type_name=_type_name(exc),
            message=str(exc),
            application=frame.f_globals.get("__name__", UNKNOWN),
            method=frame.f_code.co_name,
            stack_trace="".join(traceback.format_tb(exc.__traceback__)),
        )

    @property
    def depth(self) -> int:
        """Number of nodes in the chain starting here."""
        node, count = self, 0
        while node is not None:
            count += 1
            node = node.inner
        return count

    def to_xml(self, element_name: str = DEFAULT_ELEMENT_NAME) -> etree._Element:
        """
        Render the chain as nested XML::

            <Exception Type="builtins.ValueError">
              <Message Content="..."/>
              <Source Application="..." Method="..." StackTrace="..."/>
              <InnerException .../>
            </Exception>

        The last node in the chain gets an empty ``<InnerException/>``.
        Characters that XML cannot carry, such as NUL or terminal escape
        codes, are written as ``\\xNN`` escapes.
        """
        element = etree.Element(element_name, Type=_xml_text(self.type_name))
        etree.SubElement(element, "Message", Content=_xml_text(self.message))
        etree.SubElement(
            element,
            "Source",
            Application=_xml_text(self.application),
            Method=_xml_text(self.method),
            StackTrace=_xml_text(self.stack_trace),
        )

        if self.inner is None:
            etree.SubElement(element, INNER_ELEMENT_NAME)
        else:
            element.append(self.inner.to_xml(INNER_ELEMENT_NAME))
        return element

    def to_dict(self) -> Dict[str, Any]:
        """Convert the chain into nested dictionaries."""
        return {
            "type": self.type_name,
            "message": self.message,
            "source": {
                "application": self.application,
                "method": self.method,
                "stack_trace": self.stack_trace,
            },
            "inner": self.inner.to_dict() if self.inner is not None else None,
        }


def as_xml_element(exc: BaseException, element_name: str = DEFAULT_ELEMENT_NAME) -> etree._Element:
    """
    Serialize ``exc`` and its causes into an XML element.

    Raises:
        MissingArgumentError: If ``exc`` is None.
        InvalidArgumentError: If ``element_name`` is blank.
    """
    if exc is None:
        raise MissingArgumentError("exc", "Provided exception is None")
    if element_name is None or not element_name.strip():
        raise InvalidArgumentError(
            "element_name", f"Provided element name is invalid: {element_name!r}", element_name
        )

    return ExceptionNode.from_exception(exc).to_xml(element_name)


def as_xml_string(exc: BaseException, element_name: str = DEFAULT_ELEMENT_NAME) -> str:
    """Same as ``as_xml_element`` but returns pretty-printed text."""
    return etree.tostring(as_xml_element(exc, element_name), pretty_print=True, encoding="unicode")
