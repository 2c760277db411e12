"""Pytest configuration and fixtures for NuGet Version Updater tests."""

import logging
import shutil
import tempfile
from pathlib import Path
from typing import Callable, Generator

import pytest

from nuget_version_updater.models import UpdateRequest
from nuget_version_updater.versioning import parse_version


@pytest.fixture(autouse=True)
def _capture_debug_logs(caplog):
    """Record every log level from the package, including debug lines."""
    caplog.set_level(logging.DEBUG, logger="nuget_version_updater")


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    tmp = Path(tempfile.mkdtemp())
    yield tmp
    shutil.rmtree(tmp, ignore_errors=True)


@pytest.fixture
def sample_solution_path() -> Path:
    """Get path to the pristine sample solution tree."""
    return Path(__file__).parent / "fixtures" / "sample_solution"


@pytest.fixture
def sample_solution(temp_dir: Path, sample_solution_path: Path) -> Path:
    """Copy the sample solution into a temporary directory tests may modify."""
    target = temp_dir / "sample_solution"
    shutil.copytree(sample_solution_path, target)
    return target


@pytest.fixture
def make_request() -> Callable[..., UpdateRequest]:
    """Build an UpdateRequest with its target version already parsed."""

    def _make(
        package_name: str = "Foo",
        package_version: str = "1.2.0",
        rollback: bool = False,
        preview: bool = False,
        verbose: bool = False,
    ) -> UpdateRequest:
        return UpdateRequest(
            package_name=package_name,
            package_version=package_version,
            rollback=rollback,
            preview=preview,
            verbose=verbose,
            target_version=parse_version(package_version),
        )

    return _make


@pytest.fixture
def nested_project_xml() -> str:
    """Old-style project with the version held in a nested element."""
    return """<?xml version="1.0" encoding="utf-8"?>
<Project ToolsVersion="15.0" xmlns="http://schemas.microsoft.com/developer/msbuild/2003">
  <PropertyGroup>
    <FileUpgradeFlags>
    </FileUpgradeFlags>
  </PropertyGroup>
  <ItemGroup>
    <PackageReference Include="Foo">
      <Version>1.0.0</Version>
    </PackageReference>
    <PackageReference Include="Bar">
      <Version>0.5.0</Version>
    </PackageReference>
  </ItemGroup>
</Project>
"""


@pytest.fixture
def attribute_project_xml() -> str:
    """SDK-style project with the version held in an attribute."""
    return """<Project Sdk="Microsoft.NET.Sdk">
  <ItemGroup>
    <PackageReference Include="Foo" Version="1.0.0" />
    <PackageReference Include="Bar" Version="0.5.0" />
  </ItemGroup>
</Project>
"""


@pytest.fixture
def packages_config_xml() -> str:
    """Flat packages.config manifest."""
    return """<?xml version="1.0" encoding="utf-8"?>
<packages>
  <package id="Foo" version="1.0.0" targetFramework="net462" />
  <package id="Bar" version="0.5.0" targetFramework="net462" />
</packages>
"""
