"""Syntax checking - Confirm source text is well formed before static checks.

Python source is compiled with ``ast``. Rust source is parsed with the
tree-sitter Rust grammar; any ERROR or MISSING node makes it invalid.
The language of a file is recognized from its name with Pygments.
Languages without a parser have no checker, so their files fail closed.
"""

from __future__ import annotations

import ast
from types import MappingProxyType
from typing import Callable, Mapping, Optional, Protocol, runtime_checkable

import tree_sitter_rust
from pygments.lexers import get_lexer_by_name, get_lexer_for_filename
from pygments.util import ClassNotFound
from tree_sitter import Language, Node, Parser

from glyphspec.exceptions import VerificationError

PYTHON_SUFFIXES = (".py", ".pyi")


@runtime_checkable
class SyntaxChecker(Protocol):
    """Protocol for syntax checkers.

    ``check`` returns nothing for well-formed text and raises
    VerificationError with a descriptive reason otherwise.
    """

    language: str

    def check(self, source: str) -> None: ...


class PythonSyntaxChecker:
    """Full syntax check of Python source using the ``ast`` module."""

    language = "python"

    def check(self, source: str) -> None:
        try:
            ast.parse(source)
        except SyntaxError as e:
            raise VerificationError(f"invalid syntax: {e.msg} (line {e.lineno})") from e
        except ValueError as e:
            # null bytes on older interpreters
            raise VerificationError(f"invalid syntax: {e}") from e


def _first_error(node: Node) -> Optional[Node]:
    """Depth-first search for the first ERROR or MISSING node."""
    if node.is_error or node.is_missing:
        return node
    for child in node.children:
        if child.has_error or child.is_missing:
            found = _first_error(child)
            if found is not None:
                return found
    return None


class TreeSitterSyntaxChecker:
    """Full parse with a tree-sitter grammar."""

    def __init__(self, language: str, grammar: Language):
        self.language = language
        self.parser = Parser(grammar)

    def check(self, source: str) -> None:
        tree = self.parser.parse(source.encode("utf-8"))
        root = tree.root_node
        if not root.has_error:
            return

        node = _first_error(root) or root
        line = node.start_point[0] + 1
        if node.is_missing:
            raise VerificationError(f"invalid syntax: missing {node.type!r} (line {line})")
        text = (node.text or b"").decode("utf-8", errors="replace")
        snippet = text.splitlines()[0] if text else ""
        raise VerificationError(f"invalid syntax: unexpected {snippet!r} (line {line})")


def rust_checker() -> TreeSitterSyntaxChecker:
    return TreeSitterSyntaxChecker("rust", Language(tree_sitter_rust.language()))


# Language name (Pygments' primary alias) -> checker factory
CHECKERS: Mapping[str, Callable[[], SyntaxChecker]] = MappingProxyType(
    {
        "python": PythonSyntaxChecker,
        "rust": rust_checker,
    }
)


def _canonical_language(language: str) -> str:
    """Resolve a language name or alias ("rs", "py3") to its primary alias."""
    name = language.lower()
    if name in CHECKERS:
        return name
    try:
        return get_lexer_by_name(name).aliases[0]
    except ClassNotFound:
        return name


def checker_for_language(language: str) -> SyntaxChecker:
    """Return a checker for a language name (e.g. "python", "rust").

    Raises:
        VerificationError: If no checker exists for the language
    """
    factory = CHECKERS.get(_canonical_language(language))
    if factory is None:
        raise VerificationError(f"no syntax checker for language: {language}")
    return factory()


def checker_for_filename(filename: str, default_language: str = "") -> SyntaxChecker:
    """Pick a checker from a file name.

    Args:
        filename: Source file name or path.
        default_language: Language used when no checker matches the name;
            empty means such files cannot be checked.

    Raises:
        VerificationError: If no checker applies
    """
    if filename.lower().endswith(PYTHON_SUFFIXES):
        return PythonSyntaxChecker()
    try:
        language = get_lexer_for_filename(filename).aliases[0]
    except ClassNotFound:
        language = ""
    factory = CHECKERS.get(language)
    if factory is not None:
        return factory()
    if default_language:
        return checker_for_language(default_language)
    raise VerificationError(f"no syntax checker for {filename}")
