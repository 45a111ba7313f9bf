"""Base model for control-plane documents."""

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def none_to_list(v: Any) -> Any:
    return v if v is not None else []


def none_to_dict(v: Any) -> Any:
    return v if v is not None else {}


def resource_id(link: str) -> str:
    """Last path segment of a self-link (``/resources/tags/abc`` -> ``abc``)."""
    return link.rstrip("/").rsplit("/", 1)[-1] if link else ""


class Document(BaseModel):
    """Base class for documents exchanged with the control plane.

    Field names are snake_case in Python and camelCase on the wire.
    Unknown server fields are ignored.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    document_self_link: str = ""

    @property
    def id(self) -> str:
        return resource_id(self.document_self_link)
