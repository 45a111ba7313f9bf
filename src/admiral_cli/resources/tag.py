"""Tag resource model."""

from __future__ import annotations

from typing import Annotated

from pydantic import BeforeValidator, Field

from admiral_cli.engine.errors import MalformedTagError
from admiral_cli.resources.base import Document, none_to_dict, none_to_list


class Tag(Document):
    """A key/value label.

    Tags are matched by the exact ``(key, value)`` pair; the self-link is
    only known once the server has stored the tag.
    """

    key: str = ""
    value: str = ""

    @classmethod
    def parse(cls, text: str) -> Tag:
        """Build a tag from ``key`` or ``key:value`` input.

        Raises:
            MalformedTagError: More than one colon, or an empty key.
        """
        if not text:
            raise MalformedTagError(text)
        if ":" not in text:
            return cls(key=text, value="")
        parts = text.split(":")
        if len(parts) != 2:
            raise MalformedTagError(text)
        key, value = parts[0].strip(), parts[1].strip()
        if not key:
            raise MalformedTagError(text)
        return cls(key=key, value=value)

    def __str__(self) -> str:
        return f"[{self.key}:{self.value}]"


class TagList(Document):
    """Expanded tag listing as returned by the tags endpoint."""

    document_links: Annotated[list[str], BeforeValidator(none_to_list)] = Field(
        default_factory=list
    )
    documents: Annotated[dict[str, Tag], BeforeValidator(none_to_dict)] = Field(
        default_factory=dict
    )

    def first(self) -> Tag | None:
        """First tag in server order, or None for an empty listing."""
        for link in self.document_links:
            if link in self.documents:
                return self.documents[link]
        return next(iter(self.documents.values()), None)
