"""Shared entity, table and repository bases."""

from ._base import Entity, EntityTable
from ._repository import EntityRepository

__all__ = ["Entity", "EntityTable", "EntityRepository"]
