"""Pluggable strategies used by the sync tasks.

Each strategy is a single-method capability object injected through
TaskConfig. The defaults reproduce the behaviour expected for Rails-style
YAML locale files; callers can supply their own implementations to support
other formats or interactive front ends.
"""

import fnmatch
import logging
from pathlib import Path
from typing import Any, Iterable, Optional, Protocol, Tuple, runtime_checkable

import yaml
from rich.console import Console

logger = logging.getLogger(__name__)


@runtime_checkable
class SkipPredicate(Protocol):
    """Decides whether a local file must be left out of the export."""

    def should_skip(self, path: Path) -> bool:
        ...


@runtime_checkable
class LangIsoInferer(Protocol):
    """Infers the language code of a translation file from its raw content."""

    def infer(self, content: str) -> Optional[str]:
        ...


@runtime_checkable
class TranslationsLoader(Protocol):
    """Decodes the raw text of a bundle entry into plain data."""

    def load(self, raw: str) -> Any:
        ...


@runtime_checkable
class TranslationsConverter(Protocol):
    """Renders decoded translation data as the text written to disk."""

    def convert(self, data: Any) -> str:
        ...


@runtime_checkable
class Confirmer(Protocol):
    """Asks a yes/no question and blocks until it is answered."""

    def confirm(self, prompt: str) -> bool:
        ...


class NeverSkip:
    """Exports every file that matches the extension filter."""

    def should_skip(self, path: Path) -> bool:
        return False


class SkipByPattern:
    """Skips files whose name or path matches a shell-style pattern.

    Patterns are matched with fnmatch against the file name and against the
    full POSIX path, so both ``"*.bak.yml"`` and ``"*/drafts/*"`` work.

    Example:
        >>> SkipByPattern(["*_draft.yml"]).should_skip(Path("locales/en_draft.yml"))
        True
    """

    def __init__(self, patterns: Iterable[str]):
        self.patterns: Tuple[str, ...] = tuple(patterns)

    def should_skip(self, path: Path) -> bool:
        posix = Path(path).as_posix()
        name = Path(path).name
        for pattern in self.patterns:
            if fnmatch.fnmatch(name, pattern) or fnmatch.fnmatch(posix, pattern):
                logger.debug(f"Skipping {posix} (matches '{pattern}')")
                return True
        return False


class FirstKeyLangIsoInferer:
    """Uses the first top-level key of a YAML document as the language code.

    Rails locale files are rooted at the language (``en:``, ``ru_RU:``), so
    the first key is the language ISO code.
    """

    def infer(self, content: str) -> Optional[str]:
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            logger.debug(f"Cannot infer language, content is not valid YAML: {e}")
            return None

        if not isinstance(data, dict) or not data:
            return None

        return str(next(iter(data)))


class SafeYamlLoader:
    """Loads YAML restricted to plain scalars, mappings and sequences.

    Tags that would construct arbitrary Python objects
    (``!!python/object`` and friends) raise yaml.YAMLError.
    """

    def load(self, raw: str) -> Any:
        return yaml.safe_load(raw)


class YamlConverter:
    """Dumps translation data back to block-style YAML."""

    def convert(self, data: Any) -> str:
        return yaml.safe_dump(
            data,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False
        )


class ConsoleConfirmer:
    """Prints a warning and reads a single line of terminal input.

    Only ``y`` or ``yes`` (any case, surrounding whitespace ignored) counts
    as an affirmative answer. End of input counts as a decline.
    """

    AFFIRMATIVE = frozenset({'y', 'yes'})

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def confirm(self, prompt: str) -> bool:
        self.console.print(f"[yellow]⚠[/yellow] {prompt}", style="yellow")
        try:
            answer = self.console.input("Enter Y to continue: ")
        except EOFError:
            return False
        return answer.strip().lower() in self.AFFIRMATIVE
