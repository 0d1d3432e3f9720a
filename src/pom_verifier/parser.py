"""Parse Maven pom.xml files into a ManifestModel using lxml."""

from __future__ import annotations

from pathlib import Path

from lxml import etree

from pom_verifier.exceptions import PomNotFoundError, PomParseError
from pom_verifier.models import License, ManifestModel, Parent, Repository


_PROJECT = "/*[local-name()='project']"


def _text_first(node: etree._Element, xpath_expr: str) -> str | None:
    """Get text of the first matching element using namespace-agnostic XPath.

    Args:
        node: Root element to query under.
        xpath_expr: XPath expression (should use local-name()).

    Returns:
        Text content if found and non-empty, otherwise None.
    """
    found = node.xpath(xpath_expr)
    if not found:
        return None
    first = found[0]
    if isinstance(first, etree._Element):
        text = (first.text or "").strip()
        return text or None
    if isinstance(first, str):
        text = first.strip()
        return text or None
    return None


def _children(node: etree._Element, xpath_expr: str) -> list[etree._Element]:
    return [n for n in node.xpath(xpath_expr) if isinstance(n, etree._Element)]


def _parse_bytes(data: bytes) -> etree._Element:
    """Parse XML bytes and return the ``<project>`` root element.

    Raises:
        PomParseError: If the XML is malformed or the root is not a project.
    """
    try:
        parser = etree.XMLParser(resolve_entities=False, no_network=True, recover=False)
        root = etree.fromstring(data, parser=parser)
    except (etree.XMLSyntaxError, ValueError) as exc:
        raise PomParseError(f"Failed to parse pom.xml: {exc}") from exc
    if root is None or etree.QName(root).localname != "project":
        raise PomParseError("pom.xml root element is not <project>")
    return root


def _parse_properties(root: etree._Element) -> dict[str, str]:
    props: dict[str, str] = {}
    for n in _children(root, f"{_PROJECT}/*[local-name()='properties']/*"):
        key = etree.QName(n).localname
        val = (n.text or "").strip()
        if key and val:
            props[key] = val
    return props


def _parse_parent(root: etree._Element) -> Parent | None:
    nodes = _children(root, f"{_PROJECT}/*[local-name()='parent']")
    if not nodes:
        return None
    node = nodes[0]
    return Parent(
        group_id=_text_first(node, "./*[local-name()='groupId']"),
        artifact_id=_text_first(node, "./*[local-name()='artifactId']"),
        version=_text_first(node, "./*[local-name()='version']"),
    )


def _parse_repositories(root: etree._Element, container: str, entry: str) -> list[Repository]:
    return [
        Repository(
            id=_text_first(n, "./*[local-name()='id']"),
            url=_text_first(n, "./*[local-name()='url']"),
        )
        for n in _children(
            root, f"{_PROJECT}/*[local-name()='{container}']/*[local-name()='{entry}']"
        )
    ]


def parse_manifest_bytes(data: bytes) -> ManifestModel:
    """Parse raw pom.xml content.

    Notes:
        - Namespace handling: uses `local-name()` XPath so it works with or without XML namespaces.
        - Property placeholders like `${...}` are kept verbatim; the verifier
          reads declared values, not the effective model.

    Args:
        data: The pom.xml bytes.

    Raises:
        PomParseError: If the content is not a well-formed Maven project.

    Returns:
        A `ManifestModel` with the fields the hosting policies inspect.
    """
    root = _parse_bytes(data)

    licenses = [
        License(
            name=_text_first(n, "./*[local-name()='name']"),
            url=_text_first(n, "./*[local-name()='url']"),
        )
        for n in _children(root, f"{_PROJECT}/*[local-name()='licenses']/*[local-name()='license']")
    ]
    modules = [
        (n.text or "").strip()
        for n in _children(root, f"{_PROJECT}/*[local-name()='modules']/*[local-name()='module']")
        if (n.text or "").strip()
    ]

    return ManifestModel(
        artifact_id=_text_first(root, f"{_PROJECT}/*[local-name()='artifactId']"),
        group_id=_text_first(root, f"{_PROJECT}/*[local-name()='groupId']"),
        name=_text_first(root, f"{_PROJECT}/*[local-name()='name']"),
        parent=_parse_parent(root),
        properties=_parse_properties(root),
        licenses=licenses,
        repositories=_parse_repositories(root, "repositories", "repository"),
        plugin_repositories=_parse_repositories(root, "pluginRepositories", "pluginRepository"),
        modules=modules,
    )


def parse_manifest(path: str | Path) -> ManifestModel:
    """Parse a pom.xml file from disk.

    Raises:
        PomNotFoundError: If the file does not exist.
        PomParseError: If the file cannot be read or parsed.
    """
    pom_path = Path(path)
    if not pom_path.exists():
        raise PomNotFoundError(f"pom.xml not found: {pom_path}")
    try:
        data = pom_path.read_bytes()
    except OSError as exc:
        raise PomParseError(f"Failed to read pom.xml: {pom_path}") from exc
    return parse_manifest_bytes(data)
