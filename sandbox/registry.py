"""
Supported languages and the toolchain used to build and run each of them.
"""

import sys
from dataclasses import dataclass
from enum import Enum

from core.errors import UnsupportedLanguageError


class Language(str, Enum):
    PYTHON = "python"
    JAVASCRIPT = "javascript"
    CPP = "cpp"


@dataclass(frozen=True)
class LanguageConfig:
    """
    Toolchain descriptor for one language.

    Commands are argument vectors; ``{source}`` and ``{binary}`` are replaced
    with the workspace paths before the process is spawned.
    """

    language: Language
    display_name: str
    source_extension: str
    run_command: tuple[str, ...]
    template: str
    compile_command: tuple[str, ...] | None = None

    @property
    def name(self) -> str:
        return self.language.value

    @property
    def is_compiled(self) -> bool:
        return self.compile_command is not None


_CONFIGS: dict[Language, LanguageConfig] = {
    Language.PYTHON: LanguageConfig(
        language=Language.PYTHON,
        display_name="Python",
        source_extension="py",
        run_command=(sys.executable, "{source}"),
        template="# Python code\n",
    ),
    Language.JAVASCRIPT: LanguageConfig(
        language=Language.JAVASCRIPT,
        display_name="JavaScript",
        source_extension="js",
        run_command=("node", "{source}"),
        template="// JavaScript code\n",
    ),
    Language.CPP: LanguageConfig(
        language=Language.CPP,
        display_name="C++",
        source_extension="cpp",
        compile_command=("g++", "{source}", "-o", "{binary}"),
        run_command=("{binary}",),
        template=(
            "#include <iostream>\n"
            "using namespace std;\n"
            "\n"
            "int main() {\n"
            "    // Your code here\n"
            "    return 0;\n"
            "}"
        ),
    ),
}

_missing = [language.value for language in Language if language not in _CONFIGS]
if _missing:
    raise RuntimeError(f"No toolchain configured for: {', '.join(_missing)}")


def lookup(language_id: str | None) -> LanguageConfig:
    """Return the config for ``language_id`` or raise UnsupportedLanguageError."""
    try:
        language = Language(language_id)
    except ValueError:
        raise UnsupportedLanguageError(language_id) from None
    return _CONFIGS[language]


def list_languages() -> list[LanguageConfig]:
    return [_CONFIGS[language] for language in Language]
