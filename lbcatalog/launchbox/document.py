"""
Incremental reading of LaunchBox XML documents.

LaunchBox documents are flat: a <LaunchBox> root holding one element per
record. Reading them as a stream keeps the records that precede a syntax
error, so a truncated file still contributes what it contains.
"""

from pathlib import Path
from typing import Iterator, Union

from lxml import etree

from .fields import ROOT_TAG


class DocumentError(Exception):
    """A LaunchBox document could not be opened or read to its end."""
    pass


def open_document(xml_path: Union[str, Path]) -> Iterator[etree._Element]:
    """
    Open a LaunchBox document and check its root element.

    Args:
        xml_path: Path to the document

    Returns:
        Iterator over the complete top-level records, in document order.
        It raises DocumentError when it runs into a syntax error; records
        yielded before that remain valid.

    Raises:
        DocumentError: If the file cannot be opened, does not start with
                       well-formed XML, or has the wrong root element
    """
    try:
        events = etree.iterparse(str(xml_path), events=('start', 'end'))
        _, root = next(events)
    except OSError:
        raise DocumentError(f"could not open `{xml_path}`")
    except (etree.XMLSyntaxError, StopIteration) as e:
        raise DocumentError(f"could not parse `{xml_path}`: {e}")

    if root.tag != ROOT_TAG:
        raise DocumentError(f"`{xml_path}` does not have a `<{ROOT_TAG}>` root node!")

    return _iter_records(xml_path, events)


def _iter_records(xml_path: Union[str, Path], events) -> Iterator[etree._Element]:
    depth = 1  # the root start event is already consumed
    try:
        for event, elem in events:
            if event == 'start':
                depth += 1
                continue

            depth -= 1
            if depth == 1:
                yield elem
                elem.clear()
    except etree.XMLSyntaxError as e:
        raise DocumentError(f"could not parse `{xml_path}`: {e}")
