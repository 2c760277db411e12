"""Load project XML documents and write them back in Visual Studio's layout.

ElementTree's own writer invents ``ns0:`` prefixes, drops the declaration's
quoting style and cannot keep ``<Tag></Tag>`` apart from ``<Tag />``, so
documents are written by :func:`serialize` instead:

- UTF-8 (a byte order mark is kept when the source had one)
- comments and processing instructions before and after the root are kept
- two-space indentation, CRLF line endings
- namespace declarations re-emitted on the element that declared them, with
  their original prefixes
- elements without content stay self-closing; elements whose content was
  only whitespace are written as an empty open/close pair
"""

from __future__ import annotations

import codecs
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Tuple
from xml.etree import ElementTree as ET
from xml.sax.saxutils import escape

from . import config

XML_NAMESPACE = "http://www.w3.org/XML/1998/namespace"

_ATTR_ENTITIES = {'"': "&quot;", "\n": "&#xA;", "\r": "&#xD;", "\t": "&#x9;"}


@dataclass
class XmlDocument:
    root: ET.Element
    declarations: Dict[ET.Element, List[Tuple[str, str]]] = field(default_factory=dict)
    prolog: List[ET.Element] = field(default_factory=list)
    epilog: List[ET.Element] = field(default_factory=list)
    declaration: bool = False
    bom: bool = False


def local_name(tag) -> str:
    """Strip any ``{namespace}`` prefix from an element or attribute name."""
    if not isinstance(tag, str):
        return ""
    return tag.rsplit("}", 1)[-1]


def load_document(path: Path) -> XmlDocument:
    """Parse ``path`` keeping comments, processing instructions and namespace prefixes.

    Raises ``ET.ParseError`` for malformed XML and ``OSError`` when the
    file cannot be read.
    """
    data = Path(path).read_bytes()

    parser = ET.XMLParser(target=ET.TreeBuilder(insert_comments=True, insert_pis=True))
    parser.feed(data)
    root = parser.close()

    # Elements of the event stream are separate objects; they are matched
    # to the tree above by document order.
    reader = ET.XMLPullParser(events=("start-ns", "start", "end", "comment", "pi"))
    reader.feed(data)
    reader.close()

    elements = [elem for elem in root.iter() if isinstance(elem.tag, str)]
    declarations: Dict[ET.Element, List[Tuple[str, str]]] = {}
    prolog: List[ET.Element] = []
    epilog: List[ET.Element] = []
    pending: List[Tuple[str, str]] = []
    position = depth = 0
    for event, item in reader.read_events():
        if event == "start-ns":
            pending.append(item)
        elif event == "start":
            if pending:
                declarations[elements[position]] = pending
                pending = []
            position += 1
            depth += 1
        elif event == "end":
            depth -= 1
        elif depth == 0:
            (epilog if position else prolog).append(item)

    bom = data.startswith(codecs.BOM_UTF8)
    head = data[len(codecs.BOM_UTF8):] if bom else data
    return XmlDocument(
        root=root,
        declarations=declarations,
        prolog=prolog,
        epilog=epilog,
        declaration=head.lstrip().startswith(b"<?xml"),
        bom=bom,
    )


def save_document(document: XmlDocument, path: Path) -> None:
    encoding = "utf-8-sig" if document.bom else config.OUTPUT_ENCODING
    with open(path, "w", encoding=encoding, newline="") as handle:
        handle.write(serialize(document))


def serialize(document: XmlDocument) -> str:
    lines: List[str] = []
    if document.declaration:
        lines.append(config.XML_DECLARATION)

    for node in document.prolog:
        _write_element(node, 0, {}, lines, document.declarations)
    _write_element(document.root, 0, {}, lines, document.declarations)
    for node in document.epilog:
        _write_element(node, 0, {}, lines, document.declarations)
    return config.OUTPUT_NEWLINE.join(lines) + config.OUTPUT_NEWLINE


def _qualify(name: str, scope: Dict[str, str], attribute: bool = False) -> str:
    """Render ``{uri}local`` with a prefix bound to ``uri`` in ``scope``.

    ``scope`` maps prefix to URI, innermost binding last. Attributes never
    take the default namespace.
    """
    if not name.startswith("{"):
        return name
    uri, local = name[1:].split("}", 1)
    if uri == XML_NAMESPACE:
        return f"xml:{local}"
    if not attribute and scope.get("") == uri:
        return local
    for prefix in reversed(list(scope)):
        if prefix and scope[prefix] == uri:
            return f"{prefix}:{local}"
    return local


def _text(value: str) -> str:
    return escape(value).replace("\n", config.OUTPUT_NEWLINE)


def _write_element(elem, depth, scope, lines, declarations):
    indent = config.OUTPUT_INDENT * depth

    if elem.tag is ET.Comment:
        comment = (elem.text or "").replace("\n", config.OUTPUT_NEWLINE)
        lines.append(f"{indent}<!--{comment}-->")
        return
    if elem.tag is ET.ProcessingInstruction:
        lines.append(f"{indent}<?{elem.text or ''}?>")
        return

    own = declarations.get(elem, [])
    if own:
        scope = dict(scope)
        for prefix, uri in own:
            scope.pop(prefix, None)
            scope[prefix] = uri

    name = _qualify(elem.tag, scope)
    attributes = [(_qualify(key, scope, attribute=True), value) for key, value in elem.items()]
    attributes.extend((f"xmlns:{prefix}" if prefix else "xmlns", uri) for prefix, uri in own)
    start = indent + "<" + name + "".join(
        f' {key}="{escape(value, _ATTR_ENTITIES)}"' for key, value in attributes
    )

    children = list(elem)
    text = elem.text
    if not children:
        if text is None:
            lines.append(f"{start} />")
        elif not text.strip():
            lines.append(f"{start}></{name}>")
        else:
            lines.append(f"{start}>{_text(text)}</{name}>")
        return

    lines.append(f"{start}>")
    inner = indent + config.OUTPUT_INDENT
    if text and text.strip():
        lines.append(inner + _text(text.strip()))
    for child in children:
        _write_element(child, depth + 1, scope, lines, declarations)
        if child.tail and child.tail.strip():
            lines.append(inner + _text(child.tail.strip()))
    lines.append(f"{indent}</{name}>")
