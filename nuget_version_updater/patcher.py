"""Rewrite the version of one NuGet package inside a project document.

Project files reference packages like this:

    <PackageReference Include="PRISM-Library">
      <Version>1.0.2</Version>
    </PackageReference>

or, in SDK-style projects, ``<PackageReference Include="PRISM-Library" Version="1.0.2" />``.
``packages.config`` lists ``<package id="PRISM-Library" version="1.0.2" />``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional
from xml.etree import ElementTree as ET

from . import config
from .errors import ConfigurationError
from .formatting import normalize_empty_tag_pairs
from .models import DeclarationMatch, PatchResult, UpdateRequest, VersionLocation
from .versioning import VersionStatus, classify_version, parse_version, plan_update
from .xml_document import load_document, local_name, save_document

logger = logging.getLogger(__name__)


def _attribute_key(element: ET.Element, name: str) -> Optional[str]:
    """Return the key of ``element``'s attribute called ``name``, ignoring case."""
    wanted = name.casefold()
    for key in element.keys():
        if local_name(key).casefold() == wanted:
            return key
    return None


def locate_version(
    element: ET.Element,
    name_attribute: str = config.PACKAGE_REFERENCE_NAME_ATTR,
    version_name: str = config.PACKAGE_REFERENCE_VERSION,
    nested: bool = True,
) -> Optional[DeclarationMatch]:
    """Find where a package declaration keeps its version.

    A nested ``<Version>`` child wins over a ``Version`` attribute; only the
    first one found is returned. Returns None when the declaration has no
    version at all.
    """
    name_key = _attribute_key(element, name_attribute)
    package_name = element.get(name_key, "") if name_key else ""

    if nested:
        wanted = version_name.casefold()
        for child in element:
            if local_name(child.tag).casefold() == wanted:
                return DeclarationMatch(
                    element=element,
                    package_name=package_name,
                    location=VersionLocation.ELEMENT,
                    version_node=child,
                )

    version_key = _attribute_key(element, version_name)
    if version_key is None:
        return None
    return DeclarationMatch(
        element=element,
        package_name=package_name,
        location=VersionLocation.ATTRIBUTE,
        attribute=version_key,
    )


class DocumentPatcher:
    """Applies one :class:`UpdateRequest` to project files and packages.config."""

    def __init__(self, request: UpdateRequest):
        if request.target_version is None:
            raise ConfigurationError("The target version has not been parsed")
        self.request = request

    def update_project_file(self, path: Path, display_name: Optional[str] = None) -> PatchResult:
        """Update ``PackageReference`` elements in a .csproj or .vbproj file."""
        return self._update(
            Path(path),
            display_name,
            tag=config.PACKAGE_REFERENCE_TAG,
            name_attribute=config.PACKAGE_REFERENCE_NAME_ATTR,
            version_name=config.PACKAGE_REFERENCE_VERSION,
            nested=True,
        )

    def update_packages_config(self, path: Path, display_name: Optional[str] = None) -> PatchResult:
        """Update ``<package>`` entries in a packages.config file."""
        return self._update(
            Path(path),
            display_name,
            tag=config.PACKAGES_CONFIG_TAG,
            name_attribute=config.PACKAGES_CONFIG_NAME_ATTR,
            version_name=config.PACKAGES_CONFIG_VERSION_ATTR,
            nested=False,
        )

    def _update(self, path, display_name, tag, name_attribute, version_name, nested) -> PatchResult:
        result = PatchResult(path=path)
        announced = self.request.verbose

        try:
            document = load_document(path)

            for element in document.root.iter():
                if local_name(element.tag) != tag:
                    continue
                name_key = _attribute_key(element, name_attribute)
                if name_key is None or not self.request.matches(element.get(name_key)):
                    continue

                if not announced:
                    logger.debug("  processing %s", display_name or path)
                    announced = True

                match = locate_version(element, name_attribute, version_name, nested)
                if match is None:
                    logger.debug("    no version specified for %s", element.get(name_key))
                    continue

                result.matched += 1
                if self._apply(match):
                    result.updated += 1

            if self.request.preview or not result.updated:
                return result

            save_document(document, path)
            result.saved = True
        except (ET.ParseError, OSError, ValueError) as exc:
            logger.error("Error processing file %s: %s", path, exc)
            result.error = str(exc)
            return result

        normalize_empty_tag_pairs(path)
        return result

    def _apply(self, match: DeclarationMatch) -> bool:
        found = parse_version(match.current)
        target = self.request.target_version
        new_value = plan_update(found, target, rollback=self.request.rollback)

        if new_value is None:
            if classify_version(found, target) is VersionStatus.CURRENT:
                logger.debug("    version is already up-to-date: %s", found)
            else:
                logger.warning("    referenced version %s is newer than %s; will not update", found, target)
            return False

        match.set(new_value)
        verb = "would update" if self.request.preview else "updating"
        logger.info(
            "    %s version from %s to %s for %s",
            verb,
            found,
            new_value,
            self.request.package_name,
        )
        return True