"""Localized path resolution: route table, view descriptors, resolved pages."""

from warble.routing.resolver import (
    ResolvedPage,
    RouteTable,
    ViewDescriptor,
    resolve_page,
    strip_base,
)

__all__ = ["ResolvedPage", "RouteTable", "ViewDescriptor", "resolve_page", "strip_base"]
