# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Source registry.

Canonical package repositories and the third-party services an infrastructure
deployment depends on, grouped by the protocol they are checked over. A host
may appear under both protocols; each listing is probed independently.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from enum import Enum
from types import MappingProxyType


class Protocol(str, Enum):
    HTTP = "http"
    HTTPS = "https"

    def __str__(self) -> str:
        return self.value


HTTP_SOURCES: tuple[str, ...] = (
    "ubuntu-cloud.archive.canonical.com",
    "nova.cloud.archive.ubuntu.com",
    "nova.clouds.archive.ubuntu.com",
    "cloud-images.ubuntu.com",
    "keyserver.ubuntu.com",
    "archive.ubuntu.com",
    "security.ubuntu.com",
    "usn.ubuntu.com",
    "launchpad.net",
    "api.launchpad.net",
    "ppa.launchpad.net",
    "ppa.launchpadcontent.net",
    "jujucharms.com",
    "jaas.ai",
    "charmhub.io",
    "api.charmhub.io",
    "streams.canonical.com",
    "images.maas.io",
    "packages.elastic.co",
    "artifacts.elastic.co",
    "packages.elasticsearch.org",
)

HTTPS_SOURCES: tuple[str, ...] = (
    "cloud-images.ubuntu.com",
    "keyserver.ubuntu.com",
    "contracts.canonical.com",
    "usn.ubuntu.com",
    "launchpad.net",
    "api.launchpad.net",
    "ppa.launchpad.net",
    "ppa.launchpadcontent.net",
    "jujucharms.com",
    "jaas.ai",
    "charmhub.io",
    "api.charmhub.io",
    "entropy.ubuntu.com",
    "streams.canonical.com",
    "public.apps.ubuntu.com",
    "login.ubuntu.com",
    "images.maas.io",
    "api.snapcraft.io",
    "landscape.canonical.com",
    "livepatch.canonical.com",
    "dashboard.snapcraft.io",
    "packages.elastic.co",
    "artifacts.elastic.co",
    "packages.elasticsearch.org",
)

SOURCES: Mapping[Protocol, Sequence[str]] = MappingProxyType(
    {
        Protocol.HTTP: HTTP_SOURCES,
        Protocol.HTTPS: HTTPS_SOURCES,
    }
)


def sources_for(protocol: Protocol | str, registry: Mapping[Protocol, Sequence[str]] | None = None) -> tuple[str, ...]:
    """Return the ordered host list checked over `protocol`."""
    table = SOURCES if registry is None else registry
    return tuple(table.get(Protocol(protocol), ()))


def build_url(protocol: Protocol | str, host: str) -> str:
    return f"{Protocol(protocol).value}://{host}"


__all__ = ["HTTPS_SOURCES", "HTTP_SOURCES", "Protocol", "SOURCES", "build_url", "sources_for"]
