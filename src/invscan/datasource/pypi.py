# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""PyPI Simple API (PEP 691 JSON) client for enrichers."""

from __future__ import annotations

import logging
import re

import httpx
from pydantic import BaseModel, ConfigDict, Field, field_validator

from invscan.core.exceptions import DatasourceError
from invscan.datasource.cache import RequestCache

logger = logging.getLogger("invscan.datasource.pypi")

SIMPLE_JSON = "application/vnd.pypi.simple.v1+json"

_NORMALIZE_RE = re.compile(r"[-_.]+")


def normalize_name(name: str) -> str:
    """PEP 503 project name normalisation."""
    return _NORMALIZE_RE.sub("-", name).lower()


def parse_yanked(value: object) -> bool:
    """Interpret a PEP 691 ``yanked`` value.

    ``false`` means not yanked; ``true`` or a reason string means yanked.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return True
    raise ValueError(f"invalid yanked value: {value!r}")


class DistributionFile(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    filename: str
    url: str
    hashes: dict[str, str] = Field(default_factory=dict)
    requires_python: str | None = Field(default=None, alias="requires-python")
    yanked: bool = False

    @field_validator("yanked", mode="before")
    @classmethod
    def _parse_yanked(cls, v: object) -> bool:
        return parse_yanked(v)


class ProjectIndex(BaseModel):
    """One project's page on the Simple API."""

    name: str
    files: list[DistributionFile] = Field(default_factory=list)
    versions: list[str] = Field(default_factory=list)


class PyPIRegistryClient:
    """Fetches project indexes from a PyPI-compatible registry.

    Lookups go through a :class:`RequestCache`, so concurrent enrichers
    asking for the same project share a single HTTP request.

    Args:
        base_url: Registry root, e.g. ``https://pypi.org``.
        timeout: Per-request timeout in seconds.
        client: Optional preconfigured ``httpx.AsyncClient``.
    """

    def __init__(
        self,
        base_url: str = "https://pypi.org",
        *,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._client = client or httpx.AsyncClient(timeout=httpx.Timeout(timeout))
        self._owns_client = client is None
        self._cache: RequestCache[str, ProjectIndex] = RequestCache()

    async def get_index(self, name: str) -> ProjectIndex:
        project = normalize_name(name)
        return await self._cache.get(project, lambda: self._fetch_index(project))

    async def get_versions(self, name: str) -> list[str]:
        return list((await self.get_index(name)).versions)

    async def _fetch_index(self, project: str) -> ProjectIndex:
        url = f"{self._base_url}/simple/{project}/"
        try:
            resp = await self._client.get(url, headers={"Accept": SIMPLE_JSON})
        except httpx.HTTPError as exc:
            raise DatasourceError(f"request to {url} failed: {exc}") from exc
        if resp.status_code == 404:
            raise DatasourceError(f"project {project!r} not found")
        if resp.status_code != 200:
            raise DatasourceError(f"{url} returned HTTP {resp.status_code}")
        try:
            index = ProjectIndex.model_validate(resp.json())
        except ValueError as exc:
            raise DatasourceError(f"malformed index for {project!r}: {exc}") from exc
        logger.debug("Fetched index for %s: %d files", project, len(index.files))
        return index

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> PyPIRegistryClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()
