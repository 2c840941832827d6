"""XML serialization for S3-compatible responses."""

import xmltodict
from typing import Any, Dict

XML_ENCODING = 'UTF-8'
XML_CONTENT_TYPE = 'application/xml'


def serialize_xml(document: Dict[str, Any], encoding: str = XML_ENCODING) -> str:
    """Serialize a label/value document into an XML string.

    Args:
        document (dict): Single-rooted mapping of element labels to values.
            Nested dicts become child elements in insertion order, lists repeat
            the element, and empty strings or None become empty elements.
        encoding (str): Encoding named in the XML declaration

    Returns:
        str: XML document with declaration

    Raises:
        ValueError: If the document does not have exactly one root
    """
    return xmltodict.unparse(
        document,
        encoding=encoding,
        full_document=True,
        short_empty_elements=False
    )
