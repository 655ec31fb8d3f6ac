"""Core typing information.

This module is intended to have no dependencies. It allows some core definitions to be
used in multiple modules without tightly coupling those modules.
"""
import typing

standard_attribute_names: typing.Tuple[str, ...] = ("get", "set", "value", "writable", "enumerable", "configurable")

data_attribute_names: typing.Tuple[str, ...] = ("value", "writable")

accessor_attribute_names: typing.Tuple[str, ...] = ("get", "set")

PropertyKey = typing.Hashable
"""Properties are keyed by any hashable value. *Names* are the `str` keys."""

Arguments = typing.Sequence[typing.Any]
"""Positional arguments for a function call, not including the *this* binding."""

Attributes = typing.Mapping[str, typing.Any]
"""A partial property descriptor, as supplied by callers and primitive operations."""
