"""
URL conventions and cross-link construction.

The URL templates are consumed by the routing layer; changing them is a
breaking change for every caller that navigates on them.
"""

from __future__ import annotations

from typing import Optional, Union

from ..models import (
    BlogPostReference,
    ContentType,
    CrossLink,
    ProjectReference,
    Theory,
)

THEORY_URL_TEMPLATE = "/dashboard/knowledge-hub/theory/{id}"
BLOG_POST_URL_TEMPLATE = "/blog/{slug}"
# Projects have no detail route; every project links to the listing page.
PROJECTS_URL = "/projects"

ContentPayload = Union[Theory, BlogPostReference, ProjectReference]


def content_type_of(item: ContentPayload) -> ContentType:
    if isinstance(item, Theory):
        return ContentType.THEORY
    if isinstance(item, BlogPostReference):
        return ContentType.BLOG_POST
    if isinstance(item, ProjectReference):
        return ContentType.PROJECT
    raise TypeError(f"Unsupported content item: {type(item).__name__}")


def content_url(item: ContentPayload) -> str:
    """Build the navigation URL for a theory, blog post or project."""
    content_type = content_type_of(item)
    if content_type is ContentType.THEORY:
        return THEORY_URL_TEMPLATE.format(id=item.id)
    if content_type is ContentType.BLOG_POST:
        return BLOG_POST_URL_TEMPLATE.format(slug=item.slug)
    if content_type is ContentType.PROJECT:
        return PROJECTS_URL
    raise TypeError(f"No URL template for content type {content_type!r}")


def _description_of(item: ContentPayload) -> str:
    if isinstance(item, Theory):
        return item.summary
    if isinstance(item, BlogPostReference):
        return item.excerpt
    return item.description


def truncate_description(description: str, max_length: int) -> str:
    """Trim to `max_length` characters, ending with '...' when shortened."""
    if len(description) <= max_length:
        return description
    if max_length <= 3:
        return description[:max_length]
    return description[: max_length - 3] + "..."


def build_cross_link(item: ContentPayload, description_length: Optional[int] = None) -> CrossLink:
    description = _description_of(item)
    if description_length is not None:
        description = truncate_description(description, description_length)
    return CrossLink(
        type=content_type_of(item),
        id=item.id,
        title=item.title,
        url=content_url(item),
        description=description or None,
    )
