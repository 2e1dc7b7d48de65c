"""Maven pom.xml support built on xml.etree.ElementTree."""
from __future__ import annotations

import io
import logging
import re
import threading
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from constants import BuildSystem, Constants
from versioning.models import Coordinate, Declaration, UpgradeDecision, is_placeholder
from .base import FormatProcessor

logger = logging.getLogger(__name__)

_BOM = "\ufeff"
# Markup allowed before the root element.
_PROLOG_ITEM = re.compile(r"\s+|<\?.*?\?>|<!--.*?-->|<!DOCTYPE(?:[^\[>]|\[.*?\])*>", re.DOTALL)
_ENCODING_DECL = re.compile(r"""(<\?xml[^>]*?\bencoding\s*=\s*)(["'])([A-Za-z0-9._\-]+)\2""")
_UTF8_NAMES = ("utf-8", "utf8")

# ElementTree keeps prefix registrations in a module-global map.
_namespace_lock = threading.Lock()


@dataclass
class PomDocument:
    """Parsed pom.xml plus what is needed to write it back.

    ``prolog`` and ``epilog`` hold the raw text before the root start tag and
    after its end tag; ElementTree does not keep either.
    """
    tree: ET.ElementTree
    prolog: str = ""
    epilog: str = ""
    namespaces: Tuple[Tuple[str, str], ...] = ()

    @property
    def root(self) -> ET.Element:
        return self.tree.getroot()


def local_name(tag) -> Optional[str]:
    """Tag without its ``{namespace}`` part; None for comments and PIs."""
    if not isinstance(tag, str):
        return None
    return tag.rsplit("}", 1)[-1]


def _child(parent: ET.Element, name: str) -> Optional[ET.Element]:
    for child in parent:
        if local_name(child.tag) == name:
            return child
    return None


def _child_text(parent: ET.Element, name: str) -> Optional[str]:
    node = _child(parent, name)
    if node is None or node.text is None:
        return None
    text = node.text.strip()
    return text or None


def _collect_namespaces(raw: bytes) -> Tuple[Tuple[str, str], ...]:
    found = []
    for _, (prefix, uri) in ET.iterparse(io.BytesIO(raw), events=("start-ns",)):
        if (prefix, uri) not in found:
            found.append((prefix, uri))
    return tuple(found)


def _register_namespaces(root: ET.Element, namespaces: Sequence[Tuple[str, str]]) -> None:
    """Register the document's prefixes so serialization reuses them.

    Only the root element's namespace is registered as the default. A nested
    element redeclaring another default namespace gets an ``nsN`` prefix.
    """
    root_uri = root.tag[1:].split("}", 1)[0] if root.tag.startswith("{") else None
    for prefix, uri in namespaces:
        if re.match(r"ns\d+$", prefix):
            continue
        if prefix == "" and uri != root_uri:
            continue
        ET.register_namespace(prefix, uri)


def _decode(raw: bytes) -> Tuple[str, Optional[str]]:
    """Decode pom bytes using the encoding named in the XML declaration."""
    head = raw[:256].decode("ascii", "replace")
    match = _ENCODING_DECL.search(head)
    encoding = match.group(3) if match else None
    return raw.decode(encoding or "utf-8"), encoding


def _split_document(text: str) -> Tuple[str, str]:
    """Return the raw text before the root start tag and after its end tag."""
    start = 0
    while True:
        match = _PROLOG_ITEM.match(text, start)
        if match is None or match.end() == start:
            break
        start = match.end()

    end = len(text)
    while True:
        stripped = text[:end].rstrip()
        if stripped.endswith("-->"):
            marker = stripped.rfind("<!--")
        elif stripped.endswith("?>"):
            marker = stripped.rfind("<?")
        else:
            marker = -1
        if marker < start:
            end = len(stripped)
            break
        end = marker
    return text[:start], text[end:]


def parse_pom(raw: bytes) -> PomDocument:
    """Parse pom bytes, keeping comments, processing instructions and the
    markup around the root element."""
    parser = ET.XMLParser(target=ET.TreeBuilder(insert_comments=True, insert_pis=True))
    root = ET.fromstring(raw, parser=parser)

    text, encoding = _decode(raw)
    bom = ""
    if text.startswith(_BOM):
        bom, text = _BOM, text[1:]
    prolog, epilog = _split_document(text)
    if encoding and encoding.lower() not in _UTF8_NAMES:
        # Output is always written as UTF-8.
        prolog = _ENCODING_DECL.sub(r"\1\2UTF-8\2", prolog, count=1)
    return PomDocument(
        tree=ET.ElementTree(root),
        prolog=bom + prolog,
        epilog=epilog,
        namespaces=_collect_namespaces(raw),
    )


def serialize(document: PomDocument) -> str:
    """Render the document back to text."""
    document.root.tail = None
    with _namespace_lock:
        _register_namespaces(document.root, document.namespaces)
        body = ET.tostring(document.root, encoding="unicode")
    return document.prolog + body + document.epilog


def extract(root: ET.Element, log: Optional[logging.Logger] = None) -> List[Declaration]:
    """Return a Declaration for every complete ``<dependency>`` in the document.

    Covers plain ``<dependencies>``, ``<dependencyManagement>`` and plugin
    dependencies alike. Elements lacking groupId, artifactId or version are
    skipped, as are versions that reference a ``${property}``.
    """
    log = log or logger
    declarations: List[Declaration] = []
    for element in root.iter():
        if local_name(element.tag) != "dependency":
            continue
        group = _child_text(element, "groupId")
        artifact = _child_text(element, "artifactId")
        version = _child_text(element, "version")
        if group is None or artifact is None or version is None:
            log.debug("Skipping incomplete dependency (%s:%s:%s)", group, artifact, version)
            continue
        if is_placeholder(version):
            log.info("Skipping %s:%s: version %s is a placeholder.", group, artifact, version)
            continue
        declarations.append(
            Declaration(
                coordinate=Coordinate(group, artifact),
                current_version=version,
                location=_child(element, "version"),
            )
        )
    return declarations


def rewrite(decisions: Sequence[UpgradeDecision]) -> int:
    """Set the chosen version on each changed ``<version>`` element.

    Whitespace around the version inside the element is kept. Returns the
    number of elements changed.
    """
    changed = 0
    for decision in decisions:
        if not decision.changed:
            continue
        element = decision.declaration.location
        element.text = element.text.replace(
            decision.declaration.current_version, decision.chosen_version, 1
        )
        changed += 1
    return changed


class MavenProcessor(FormatProcessor):
    """Processor for pom.xml files."""

    build_system = BuildSystem.MAVEN

    def file_pattern(self) -> str:
        return Constants.POM_XML_FILE

    def load(self, path: str) -> PomDocument:
        with open(path, "rb") as fh:
            return parse_pom(fh.read())

    def extract(self, document: PomDocument) -> List[Declaration]:
        return extract(document.root, log=self.logger)

    def render(self, document: PomDocument, decisions: List[UpgradeDecision]) -> str:
        rewrite(decisions)
        return serialize(document)
