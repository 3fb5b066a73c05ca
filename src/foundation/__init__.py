"""Netflex Foundation Package.

Read-only helpers over Netflex foundation data. Every helper goes through
the process-wide Netflex API client and memoizes its lookups in the
process-wide cache.

Exported:
    Variable, Setting: site variables with format coercion
    StaticContent, GlobalContent: static content blocks and their areas
    get_setting, static_content: shorthand accessors
"""
from .helpers import get_setting, static_content
from .static_content import GlobalContent, StaticContent
from .variable import Setting, Variable

__all__ = ["Variable", "Setting", "StaticContent", "GlobalContent", "get_setting", "static_content"]
