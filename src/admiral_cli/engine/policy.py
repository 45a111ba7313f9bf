"""Tag-link mutations on a placement zone's policy."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from admiral_cli.core.links import tag_link

if TYPE_CHECKING:
    from collections.abc import Iterable

    from admiral_cli.handlers.tags import TagHandler
    from admiral_cli.resources.placement_zone import EpzState

logger = logging.getLogger(__name__)


def add_tag_links(policy: EpzState, inputs: Iterable[str], tags: TagHandler) -> None:
    """Append the link of each tag in *inputs*, creating missing tags.

    Links already present are not added twice; order of first appearance is
    kept. The first failing input aborts the batch, leaving earlier inputs
    applied.
    """
    for text in inputs:
        tag_id = tags.find_or_create(text, create_if_missing=True)
        if not tag_id:
            continue
        link = tag_link(tag_id)
        if link not in policy.tag_links_to_match:
            policy.tag_links_to_match.append(link)
            logger.debug("Policy now matches %s", link)


def remove_tag_links(policy: EpzState, inputs: Iterable[str], tags: TagHandler) -> None:
    """Drop every occurrence of the links of the tags in *inputs*.

    Unknown tags are ignored and never created. All inputs are resolved
    before the policy is touched.
    """
    to_remove = set()
    for text in inputs:
        tag_id = tags.find_or_create(text, create_if_missing=False)
        if tag_id:
            to_remove.add(tag_link(tag_id))
    if to_remove:
        policy.tag_links_to_match = [
            link for link in policy.tag_links_to_match if link not in to_remove
        ]
