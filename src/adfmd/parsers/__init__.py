#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adfmd/parsers/__init__.py
"""Markdown parsing: block dispatch and the inline pattern cascade.

Handler modules import :mod:`adfmd.parsers.blocks` and
:mod:`adfmd.parsers.inline` directly, so this package initializer stays free
of imports to avoid cycles with the registry.
"""
