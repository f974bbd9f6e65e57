"""
Module resolver for import specifiers.

Turns the specifier of an import declaration into an absolute file path:
aliases first, then external packages, then relative paths.
"""

from __future__ import annotations

import os

from .aliases import AliasTable

EXTERNAL_PACKAGES_DIR = "node_modules"


class ModuleResolver:
    """Resolves import specifiers to absolute paths.

    Unresolvable specifiers are never rejected: they produce a path that
    does not exist, and reading it later fails explicitly.
    """

    def __init__(self, aliases: AliasTable, cwd: str, root: str, module_suffix: str = ".ts"):
        """
        Initialize the resolver.

        Args:
            aliases: Expanded alias table
            cwd: Source root, base of relative specifiers without a base directory
            root: Package root, external packages live in root/node_modules
            module_suffix: Suffix appended by resolve_module
        """
        self.aliases = aliases
        self.cwd = cwd
        self.root = root
        self.module_suffix = module_suffix

    def resolve(self, specifier: str, base_dir: str | None = None) -> str:
        """
        Resolve a raw specifier.

        Args:
            specifier: Specifier as written in the import, e.g. "src/user" or "./user"
            base_dir: Directory of the importing file

        Returns:
            Absolute path
        """
        # Aliases rewrite sequentially, each one on the previous result
        has_alias = False
        for prefix, target in self.aliases.items():
            if specifier.startswith(prefix):
                has_alias = True
                specifier = target + specifier[len(prefix) :]

        if not has_alias and not specifier.startswith((".", "/")):
            return os.path.normpath(os.path.join(self.root, EXTERNAL_PACKAGES_DIR, specifier))

        if specifier.startswith("."):
            return os.path.normpath(os.path.join(base_dir or self.cwd, specifier))

        return os.path.normpath(os.path.join(self.cwd, specifier))

    def resolve_module(self, specifier: str, base_dir: str | None = None) -> str:
        """
        Resolve a specifier to a source file.

        Appends the module suffix; "dir" resolves to "dir/index.ts" when only
        the index file exists.
        """
        path = self.resolve(specifier, base_dir)
        if path.endswith(self.module_suffix):
            return path

        filepath = path + self.module_suffix
        if not os.path.isfile(filepath):
            index = os.path.join(path, "index" + self.module_suffix)
            if os.path.isfile(index):
                return index
        return filepath
