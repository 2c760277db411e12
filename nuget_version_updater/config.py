"""Search patterns, output conventions and exit codes for the version updater."""

from __future__ import annotations

# Primary project documents (matched on suffix, case-insensitive)
PROJECT_FILE_SUFFIXES = (".csproj", ".vbproj")

# Secondary flat manifest, looked up in each directory by name only
PACKAGES_CONFIG_NAME = "packages.config"

# PackageReference lookup in project files
PACKAGE_REFERENCE_TAG = "PackageReference"
PACKAGE_REFERENCE_NAME_ATTR = "Include"
PACKAGE_REFERENCE_VERSION = "Version"

# <package id="..." version="..." /> entries in packages.config
PACKAGES_CONFIG_TAG = "package"
PACKAGES_CONFIG_NAME_ATTR = "id"
PACKAGES_CONFIG_VERSION_ATTR = "version"

# Serialized documents follow the conventions Visual Studio uses
OUTPUT_ENCODING = "utf-8"
OUTPUT_INDENT = "  "
OUTPUT_NEWLINE = "\r\n"
XML_DECLARATION = '<?xml version="1.0" encoding="utf-8"?>'

# Recursive scans print a marker when this much time passes without output
PROGRESS_INTERVAL_SECONDS = 0.2
PROGRESS_MARKER = "."

EXIT_SCAN_FAILED = 1
EXIT_USAGE = 2
