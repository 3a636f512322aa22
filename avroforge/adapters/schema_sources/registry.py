"""Schemas held by Confluent Schema Registry: registry://subject or registry://subject@version."""
from __future__ import annotations

from typing import Optional

from confluent_kafka.schema_registry import SchemaRegistryClient

from avroforge.domain.errors import SchemaLoadError
from avroforge.ports.schema_source import SchemaSource

SCHEME = "registry://"


def parse_registry_locator(locator: str) -> tuple[str, Optional[int]]:
    if not locator.startswith(SCHEME):
        raise ValueError(f"Expected {SCHEME} locator, got: {locator}")
    subject, _, version = locator[len(SCHEME) :].partition("@")
    if not subject:
        raise ValueError(f"Missing subject in locator: {locator}")
    if not version:
        return subject, None
    if not version.isdigit():
        raise ValueError(f"Version must be a positive integer, got: {version}")
    return subject, int(version)


class RegistrySchemaSource(SchemaSource):
    """SRP: fetch schema text for a subject; latest unless a version is pinned."""

    def __init__(self, client: SchemaRegistryClient) -> None:
        self._client = client

    def load(self, locator: str) -> str:
        try:
            subject, version = parse_registry_locator(locator)
        except ValueError as exc:
            raise SchemaLoadError(str(exc)) from exc
        try:
            if version is None:
                registered = self._client.get_latest_version(subject)
            else:
                registered = self._client.get_version(subject, version)
        except Exception as exc:
            raise SchemaLoadError(f"registry lookup failed for {locator}: {exc}") from exc
        return registered.schema.schema_str
