r"""Serializer and deserializer collaborator interfaces.

No serialization format is implemented here; callers plug their own
implementations into the client or the request.
"""

from __future__ import annotations

__all__ = ["BaseDeserializer", "BaseSerializer", "Entity", "serialize_entity"]

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Entity:
    """A serialized request body.

    Attributes:
        content: The serialized body.
        content_type: The content type of the body.
        content_encoding: The character encoding of the body.
    """

    content: str
    content_type: str
    content_encoding: str = "utf-8"


class BaseSerializer(ABC):
    """Converts entities to request bodies.

    Attributes:
        content_type: The content type of the produced bodies.
        content_encoding: The character encoding of the produced bodies.
    """

    content_type: str = "application/octet-stream"
    content_encoding: str = "utf-8"

    @abstractmethod
    def serialize(self, entity: Any, entity_type: type | None) -> str:
        """Serialize an entity.

        Args:
            entity: The entity to serialize.
            entity_type: The declared type of the entity, if any.

        Returns:
            The serialized body.
        """


class BaseDeserializer(ABC):
    """Converts response bodies to typed entities."""

    @abstractmethod
    def deserialize(self, content: str, entity_type: type[T]) -> T:
        """Deserialize a response body.

        Args:
            content: The response body.
            entity_type: The type to build.

        Returns:
            The deserialized entity.
        """


def serialize_entity(
    serializer: BaseSerializer | None, entity: Any, entity_type: type | None
) -> Entity | None:
    """Serialize an entity into a request body.

    Args:
        serializer: The serializer to use, if any.
        entity: The entity to serialize, if any.
        entity_type: The declared type of the entity.

    Returns:
        The serialized body, or ``None`` if there is no serializer, no
            entity, or the serialized content is blank.
    """
    if serializer is None or entity is None:
        return None
    content = serializer.serialize(entity, entity_type)
    if not content or not content.strip():
        return None
    return Entity(
        content=content,
        content_type=serializer.content_type,
        content_encoding=serializer.content_encoding,
    )
