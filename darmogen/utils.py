"""
Utility functions for name formatting.
"""

from __future__ import annotations

import importlib
import re
from collections.abc import Callable

from .pipeline.errors import ConfigurationError

Formatter = Callable[[str], str]

# Acronym runs ("HTTP" in "HTTPServer"), capitalized or lowercase words, digits
_WORD_PATTERN = re.compile(r"[A-Z]+(?![a-z])|[A-Z]?[a-z]+|[0-9]+")


def split_words(text: str) -> list[str]:
    """Split text into words, handling camelCase, snake_case and kebab-case.

    Examples:
        "userProfile" -> ["user", "Profile"]
        "HTTPServer" -> ["HTTP", "Server"]
        "user_profile-item" -> ["user", "profile", "item"]
    """
    return _WORD_PATTERN.findall(text.replace("_", " ").replace("-", " "))


def pascal(text: str) -> str:
    """Convert text to PascalCase ("user_profile" -> "UserProfile")."""
    return "".join(word[0].upper() + word[1:].lower() for word in split_words(text))


def camel(text: str) -> str:
    """Convert text to camelCase ("UserProfile" -> "userProfile")."""
    result = pascal(text)
    return result[:1].lower() + result[1:]


def kebab(text: str) -> str:
    """Convert text to kebab-case ("UserProfile" -> "user-profile")."""
    return "-".join(word.lower() for word in split_words(text))


def snake(text: str) -> str:
    """Convert text to snake_case ("UserProfile" -> "user_profile")."""
    return "_".join(word.lower() for word in split_words(text))


CASINGS: dict[str, Formatter] = {
    "pascal": pascal,
    "camel": camel,
    "kebab": kebab,
    "snake": snake,
}


def _template_formatter(template: str) -> Formatter:
    def format_name(name: str) -> str:
        values = {style: casing(name) for style, casing in CASINGS.items()}
        return template.format(name=name, **values)

    return format_name


def _import_formatter(path: str) -> Formatter:
    module_name, _, attr = path.partition(":")
    try:
        module = importlib.import_module(module_name)
        formatter = getattr(module, attr)
    except (ImportError, AttributeError) as e:
        raise ConfigurationError(f"Cannot import formatter '{path}': {e}") from e
    if not callable(formatter):
        raise ConfigurationError(f"Formatter '{path}' is not callable")
    return formatter


def make_formatter(value: str | Formatter | None, default: str | Formatter) -> Formatter:
    """Build a name formatter from its configured value.

    Args:
        value: A callable, a casing name ("pascal", "camel", "kebab", "snake"),
            a template using casing names as placeholders ("{kebab}.model.dart")
            or a "module:function" import path. None selects the default.
        default: Used when value is None

    Returns:
        A function mapping an entity name to the formatted string

    Raises:
        ConfigurationError: If the value cannot be turned into a formatter
    """
    if value is None:
        value = default
    if callable(value):
        return value
    if value in CASINGS:
        return CASINGS[value]
    if "{" in value:
        return _template_formatter(value)
    if ":" in value:
        return _import_formatter(value)
    raise ConfigurationError(f"Unknown formatter '{value}', expected one of {sorted(CASINGS)}, a template or 'module:function'")
