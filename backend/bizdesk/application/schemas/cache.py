"""Pydantic DTOs for cache inspection endpoints."""

from pydantic import BaseModel


class CollectionStatus(BaseModel):
    loading: bool
    loaded: bool
    size: int
    subscribers: int


class CacheStatusResponse(BaseModel):
    collections: dict[str, CollectionStatus]


class CacheReloadResponse(BaseModel):
    reloaded: list[str]
    status: CacheStatusResponse
