"""Reading package URLs out of CycloneDX and SPDX software bills of materials."""

import json
import xml.etree.ElementTree as ET
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import PurePath
from typing import IO, Any, Protocol

_CYCLONEDX_NAMESPACE = "http://cyclonedx.org/schema/bom"
_RDF_NAMESPACE = "http://www.w3.org/1999/02/22-rdf-syntax-ns#"

# Recognised CycloneDX file name patterns.
_CYCLONEDX_GLOBS = ("bom.xml", "bom.json", "*.cdx.json", "*.cdx.xml")


@dataclass(frozen=True)
class Identifier:
    """A package identifier extracted from an SBOM."""

    purl: str


class InvalidFormatError(Exception):
    """Raised when a document cannot be read in any of a provider's formats."""

    def __init__(self, msg: str, errs: Iterable[BaseException]) -> None:
        self.msg = msg
        self.errs = list(errs)
        super().__init__(str(self))

    def __str__(self) -> str:
        details = "\n".join(f"\t{err}" for err in self.errs)
        return f"{self.msg}:\n{details}"


class SBOMReader(Protocol):
    """What every SBOM provider offers."""

    name: str

    def matches_recognized_file_names(self, path: str) -> bool:
        """Tell whether path has a standard file name for this format."""

    def get_packages(self, stream: IO) -> list[Identifier]:
        """Return the package identifiers in the document."""


def _read_all(stream: IO) -> bytes:
    try:
        stream.seek(0)
    except OSError as err:
        raise OSError(f"failed to seek to start of file: {err}") from err
    data = stream.read()
    if isinstance(data, str):
        return data.encode("utf-8")
    return data


def _local_name(tag: Any) -> str:
    if not isinstance(tag, str):
        return ""
    return tag.rsplit("}", 1)[-1]


def _namespace(tag: str) -> str:
    if tag.startswith("{"):
        return tag[1:].split("}", 1)[0]
    return ""


def _children(element: ET.Element, name: str) -> Iterator[ET.Element]:
    return (child for child in element if _local_name(child.tag) == name)


def _try_formats(
    data: bytes,
    loaders: Iterable[tuple[str, Callable[[bytes], list[Identifier]]]],
    message: str,
) -> list[Identifier]:
    errs: list[BaseException] = []
    for format_name, loader in loaders:
        try:
            return loader(data)
        except (ValueError, TypeError, KeyError, AttributeError, ET.ParseError) as err:
            errs.append(ValueError(f"failed trying {format_name}: {err}"))
    raise InvalidFormatError(message, errs)


def _cyclonedx_json_components(components: Any) -> Iterator[Identifier]:
    if not isinstance(components, list):
        raise ValueError("components must be an array")
    for component in components:
        if not isinstance(component, dict):
            raise ValueError("component must be an object")
        purl = component.get("purl") or ""
        if not isinstance(purl, str):
            raise ValueError("purl must be a string")
        if purl:
            yield Identifier(purl)
        # Components can hold components of their own.
        if component.get("components") is not None:
            yield from _cyclonedx_json_components(component["components"])


def _load_cyclonedx_json(data: bytes) -> list[Identifier]:
    bom = json.loads(data.decode("utf-8"))
    if not isinstance(bom, dict):
        raise ValueError("document is not a JSON object")
    if bom.get("bomFormat") != "CycloneDX":
        raise ValueError("invalid BOMFormat")
    if bom.get("components") is None:
        return []
    return list(_cyclonedx_json_components(bom["components"]))


def _cyclonedx_xml_components(container: ET.Element) -> Iterator[Identifier]:
    for component in _children(container, "component"):
        purl = next((el.text or "" for el in _children(component, "purl")), "").strip()
        if purl:
            yield Identifier(purl)
        for nested in _children(component, "components"):
            yield from _cyclonedx_xml_components(nested)


def _load_cyclonedx_xml(data: bytes) -> list[Identifier]:
    root = ET.fromstring(data)
    if _local_name(root.tag) != "bom":
        raise ValueError(f"expected element type <bom> but have <{_local_name(root.tag)}>")
    if not _namespace(root.tag).startswith(_CYCLONEDX_NAMESPACE):
        raise ValueError("invalid BOMFormat")
    identifiers: list[Identifier] = []
    for container in _children(root, "components"):
        identifiers.extend(_cyclonedx_xml_components(container))
    return identifiers


class CycloneDX:
    """Reads CycloneDX documents in JSON or XML form."""

    name = "CycloneDX"

    def matches_recognized_file_names(self, path: str) -> bool:
        """Tell whether path has one of the recognised CycloneDX file names."""
        filename = PurePath(path).name
        return any(fnmatchcase(filename, pattern) for pattern in _CYCLONEDX_GLOBS)

    def get_packages(self, stream: IO) -> list[Identifier]:
        """Return the package URLs of all components, nested ones included."""
        data = _read_all(stream)
        return _try_formats(
            data,
            (("json", _load_cyclonedx_json), ("xml", _load_cyclonedx_xml)),
            "failed to parse CycloneDX",
        )


def _load_spdx_json(data: bytes) -> list[Identifier]:
    document = json.loads(data.decode("utf-8"))
    if not isinstance(document, dict):
        raise ValueError("document is not a JSON object")
    packages = document.get("packages") or []
    if not isinstance(packages, list):
        raise ValueError("packages must be an array")

    identifiers = []
    for package in packages:
        if not isinstance(package, dict):
            raise ValueError("package must be an object")
        refs = package.get("externalRefs") or []
        if not isinstance(refs, list):
            raise ValueError("externalRefs must be an array")
        for ref in refs:
            if not isinstance(ref, dict):
                raise ValueError("external reference must be an object")
            if ref.get("referenceType") == "purl":
                identifiers.append(Identifier(str(ref.get("referenceLocator", ""))))
    return identifiers


def _rdf_reference_type(ref: ET.Element) -> str:
    for element in _children(ref, "referenceType"):
        resource = element.get(f"{{{_RDF_NAMESPACE}}}resource")
        if resource:
            return resource.rsplit("/", 1)[-1].rsplit("#", 1)[-1]
        return (element.text or "").strip()
    return ""


def _load_spdx_rdf(data: bytes) -> list[Identifier]:
    root = ET.fromstring(data)
    if root.tag != f"{{{_RDF_NAMESPACE}}}RDF":
        raise ValueError("document is not RDF/XML")

    identifiers = []
    for package in root.iter():
        if _local_name(package.tag) != "Package":
            continue
        for holder in _children(package, "externalRef"):
            for ref in _children(holder, "ExternalRef"):
                if _rdf_reference_type(ref) == "purl":
                    locator = next(
                        (el.text or "" for el in _children(ref, "referenceLocator")), ""
                    )
                    identifiers.append(Identifier(locator.strip()))
    return identifiers


def _tag_value_pairs(text: str) -> Iterator[tuple[str, str]]:
    pending_tag: str | None = None
    pending: list[str] = []

    for number, line in enumerate(text.splitlines(), start=1):
        if pending_tag is not None:
            pending.append(line)
            if "</text>" in line:
                yield pending_tag, "\n".join(pending)
                pending_tag, pending = None, []
            continue

        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        tag, colon, value = stripped.partition(":")
        if not colon or not tag.strip():
            raise ValueError(f"line {number}: invalid tag-value line")
        tag, value = tag.strip(), value.strip()
        if value.startswith("<text>") and "</text>" not in value:
            pending_tag, pending = tag, [value]
            continue
        yield tag, value

    if pending_tag is not None:
        raise ValueError(f"unterminated <text> value for tag {pending_tag}")


def _load_spdx_tag_value(data: bytes) -> list[Identifier]:
    pairs = list(_tag_value_pairs(data.decode("utf-8")))
    if not any(tag == "SPDXVersion" for tag, _ in pairs):
        raise ValueError("no SPDXVersion tag found")

    identifiers = []
    in_package = False
    for tag, value in pairs:
        if tag == "PackageName":
            in_package = True
        elif tag == "FileName":
            in_package = False
        elif tag == "ExternalRef" and in_package:
            parts = value.split(None, 2)
            if len(parts) != 3:
                raise ValueError(f"invalid ExternalRef value: {value}")
            if parts[1] == "purl":
                identifiers.append(Identifier(parts[2]))
    return identifiers


class SPDX:
    """Reads SPDX 2.3 documents in JSON, RDF/XML or tag-value form."""

    name = "SPDX"

    def matches_recognized_file_names(self, path: str) -> bool:
        """Tell whether the file name contains ".spdx", as SPDX files must."""
        return ".spdx" in PurePath(path).name.lower()

    def get_packages(self, stream: IO) -> list[Identifier]:
        """Return the package URLs from the packages' external references."""
        data = _read_all(stream)
        return _try_formats(
            data,
            (
                ("json", _load_spdx_json),
                ("rdf", _load_spdx_rdf),
                ("tv", _load_spdx_tag_value),
            ),
            "failed to parse SPDX",
        )


PROVIDERS: list[SBOMReader] = [SPDX(), CycloneDX()]