"""LAPPS discriminators used across the adapter.

This module centralizes the discriminator URIs understood and produced by
the service. Keeping it in the domain layer allows the envelope adapter,
the decode service and the CLI to share a single source of truth.
"""

from __future__ import annotations

from enum import Enum


class Discriminator(str, Enum):
    """Supported envelope kinds (LAPPS vocabulary URIs)."""

    GET = "http://vocab.lappsgrid.org/ns/action/get"
    ERROR = "http://vocab.lappsgrid.org/ns/error"
    LAPPS = "http://vocab.lappsgrid.org/ns/media/jsonld#lapps"
    META = "http://vocab.lappsgrid.org/ns/meta"
    QUERY = "http://vocab.lappsgrid.org/ns/action/query"
    TEXT = "http://vocab.lappsgrid.org/ns/media/text"

    @classmethod
    def matches(cls, value: object, expected: "Discriminator") -> bool:
        """Compare a raw discriminator string against an enum member."""

        return isinstance(value, str) and value == expected.value


APACHE2_LICENSE = "http://vocab.lappsgrid.org/ns/license#apache-2.0"
