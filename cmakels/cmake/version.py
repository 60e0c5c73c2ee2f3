"""
cmake version detection and online documentation URLs.

cmake 3.x and later publish one page per entry under ``/vX.Y/``. Older
releases ship a single ``cmake.html`` page with ``#kind:name`` anchors.
Callers tell the two apart by the URL shape, see ``is_legacy_help_url``.
"""

from __future__ import annotations

import re

from cmakels.cmake.cli import CMakeCLI

HELP_BASE_URL = "https://cmake.org/cmake/help/"
LATEST_SEGMENT = "latest/"

VERSION_PATTERN = re.compile(r"version\s+(\d+\.\d+\.\d+)")
MAJOR_MINOR_PATTERN = re.compile(r"(\d+\.\d+)\.\d+")

LEGACY_VERSIONS = (
    "2.8.12",
    "2.8.11",
    "2.8.10",
    "2.8.9",
    "2.8.8",
    "2.8.7",
    "2.8.6",
    "2.8.5",
    "2.8.4",
    "2.8.3",
    "2.8.2",
    "2.8.1",
    "2.8.0",
    "2.6",
)


def extract_version(output: str) -> str:
    """Return ``X.Y.Z`` from ``cmake --version`` output, or ``""``."""
    match = VERSION_PATTERN.search(output)
    if match is None:
        return ""
    return match.group(1)


def help_url_for_version(version: str) -> str:
    """Map a cmake version to the root of its online documentation."""
    if not version:
        return HELP_BASE_URL + LATEST_SEGMENT

    # Plain string comparison: "10.0.0" sorts below "3.0".
    if version >= "3.0":
        return HELP_BASE_URL + "v" + MAJOR_MINOR_PATTERN.sub(r"\1/", version)

    if version in LEGACY_VERSIONS:
        return HELP_BASE_URL + "v" + version + "/cmake.html"

    return HELP_BASE_URL + LATEST_SEGMENT


def is_legacy_help_url(url: str) -> bool:
    """True for single-page (cmake < 3.0) documentation URLs."""
    return url.endswith("html")


async def resolve_version(cli: CMakeCLI) -> str:
    return extract_version(await cli.run(["--version"]))


async def resolve_help_url(cli: CMakeCLI) -> str:
    return help_url_for_version(await resolve_version(cli))
