"""Handler for tags: lookup, find-or-create and display."""

from __future__ import annotations

import logging
from urllib.parse import quote

from admiral_cli.core.links import EXPAND_QUERY, TAGS_PATH, odata_quote
from admiral_cli.engine.errors import AdmiralError
from admiral_cli.engine.wire import serialize_tag
from admiral_cli.handlers.base import ApiHandler
from admiral_cli.resources.tag import Tag, TagList

logger = logging.getLogger(__name__)

NO_TAGS = "n/a"


def _filter_path(tag: Tag) -> str:
    expr = f"key eq '{odata_quote(tag.key)}' and value eq '{odata_quote(tag.value)}'"
    return f"{TAGS_PATH}?{EXPAND_QUERY}&$filter={quote(expr, safe='')}"


class TagHandler(ApiHandler):
    """Tag operations against the control plane."""

    def find_or_create(self, text: str, *, create_if_missing: bool) -> str:
        """Return the ID of the tag exactly matching *text* (``key[:value]``).

        When no tag matches, create it if *create_if_missing*, otherwise
        return an empty string.

        Raises:
            MalformedTagError: *text* is not a valid tag.
            TransportError: A request failed.
            DecodeError: The server answered with an unexpected body.
        """
        tag = Tag.parse(text)
        match = self._get(_filter_path(tag), TagList).first()
        if match is not None:
            return match.id
        if create_if_missing:
            return self.create(tag)
        logger.debug("No tag matches %s", tag)
        return ""

    def create(self, tag: Tag) -> str:
        """Store *tag* on the server and return its ID."""
        created = self._post(f"{TAGS_PATH}/", serialize_tag(tag), Tag)
        logger.info("Created tag %s (%s)", tag, created.id)
        return created.id

    def get(self, link: str) -> Tag:
        return self._get(link, Tag)

    def render(self, tag_links: list[str]) -> str:
        """Concatenated ``[key:value]`` forms of *tag_links*.

        Tags that cannot be fetched render as ``[:]``.
        """
        if not tag_links:
            return NO_TAGS
        parts = []
        for link in tag_links:
            try:
                tag = self.get(link)
            except AdmiralError as exc:
                logger.debug("Could not fetch tag %s: %s", link, exc)
                tag = Tag()
            parts.append(str(tag))
        return "".join(parts)
