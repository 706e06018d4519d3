#!/usr/bin/env python3
"""Derive project name candidates from a working directory path.

A path like ``/Users/alice/Workspace/acme/acme-shop/platform/platform-shop``
yields ``["platform-shop", "acme-shop"]``: the closest meaningful directory
names first, with generic layout words and home-directory boilerplate removed.
"""

from __future__ import annotations

# Generic directory names that say nothing about which project this is
GENERIC_SEGMENTS = frozenset(
    {
        "users",
        "home",
        "workspace",
        "workspaces",
        "projects",
        "repos",
        "src",
        "lib",
        "app",
        "apps",
        "packages",
        "platform",
        "service",
        "services",
        "web",
        "api",
        "server",
        "client",
        "frontend",
        "backend",
        "dev",
        "development",
        "prod",
        "staging",
        "tmp",
        "temp",
        "var",
        "opt",
        "usr",
        "volumes",
    }
)

MIN_SEGMENT_LENGTH = 3

# Segments at these depths are OS / home boilerplate (/Users/<name>/<dir>)
ROOT_SEGMENT_DEPTH = 2


def _split_segments(path: str) -> list[str]:
    return [segment for segment in path.replace("\\", "/").split("/") if segment]


def get_project_identifiers(path: str) -> list[str]:
    """Return project identifier candidates for a path, closest first.

    Args:
        path: Working directory path

    Returns:
        Identifiers in priority order, original casing preserved. Empty when
        nothing in the path looks like a project name.
    """
    segments = _split_segments(path)
    identifiers: list[str] = []

    for index in range(len(segments) - 1, -1, -1):
        segment = segments[index]
        if index <= ROOT_SEGMENT_DEPTH:
            continue
        if len(segment) < MIN_SEGMENT_LENGTH:
            continue
        lowered = segment.lower()
        if lowered in GENERIC_SEGMENTS:
            continue
        # An ancestor already carried by a closer identifier (acme -> acme-shop)
        if any(existing.lower().startswith(lowered + "-") for existing in identifiers):
            continue
        identifiers.append(segment)

    return identifiers
