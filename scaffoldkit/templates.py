"""Template registry and placeholder rendering.

Template text is an opaque payload with substitution points of the form
``{{role:casing}}``.  The registry reads template sources through Jinja2
loaders (a directory on disk or an in-memory mapping) exactly once; the
renderer then substitutes placeholders using a fixed grammar:

* ``{{ role : casing }}`` -- replaced by the ``casing`` variant of the
  ``role`` binding (whitespace around the tokens is allowed).
* ``{{{{`` -- escape, renders a literal ``{{``.
* a lone ``{`` directly before a placeholder stays literal, so
  ``{{{name:camel}}}`` renders ``{value}``.

Anything else that opens with ``{{`` is a hard error.  There are no
expressions, filters, loops or conditionals.
"""

from __future__ import annotations

import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType

from jinja2 import BaseLoader, DictLoader, Environment, FileSystemLoader

from .errors import (
    LayoutError,
    MalformedPlaceholderError,
    UnboundPlaceholderError,
    UnknownCasingError,
    UnknownTemplateError,
)
from .naming import CaseVariants

# Escape first, then a well-formed ``{{...}}`` not preceded by a third brace,
# then any stray opener.
_TOKEN = re.compile(r"\{\{\{\{|\{\{(?!\{)(?P<body>[^}]*)\}\}|\{\{(?!\{)")
_BODY = re.compile(r"^\s*(?P<role>[A-Za-z_][A-Za-z0-9_]*)\s*:\s*(?P<casing>[A-Za-z_][A-Za-z0-9_]*)\s*$")

ESCAPE = "{{{{"


# ---------------------------------------------------------------------------
# Template
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Template:
    """Immutable template text keyed by its id."""

    template_id: str
    text: str

    def placeholders(self) -> list[tuple[str, str]]:
        """Return every ``(role, casing)`` pair in order of appearance.

        Raises:
            MalformedPlaceholderError: If the text does not follow the grammar.
        """
        return [
            (token[1], token[2])
            for token in _scan(self.text, self.template_id)
            if token[0] == "placeholder"
        ]

    def roles(self) -> set[str]:
        """Return the set of roles this template needs bound."""
        return {role for role, _ in self.placeholders()}


def _scan(text: str, source: str | None) -> Iterator[tuple[str, ...]]:
    """Split *text* into ``("text", chunk)`` and ``("placeholder", role, casing)`` tokens."""
    pos = 0
    for match in _TOKEN.finditer(text):
        if match.start() > pos:
            yield ("text", text[pos : match.start()])
        pos = match.end()

        token = match.group(0)
        if token == ESCAPE:
            yield ("text", "{{")
            continue

        body = match.group("body")
        parsed = _BODY.match(body) if body is not None else None
        if parsed is None:
            line = text.count("\n", 0, match.start()) + 1
            fragment = text[match.start() : match.start() + 40].splitlines()[0]
            raise MalformedPlaceholderError(fragment, source, line)
        yield ("placeholder", parsed.group("role"), parsed.group("casing"))

    if pos < len(text):
        yield ("text", text[pos:])


# ---------------------------------------------------------------------------
# TemplateRegistry
# ---------------------------------------------------------------------------


class TemplateRegistry(Mapping[str, Template]):
    """Read-only mapping from template id to :class:`Template`.

    Every template the loader knows about is read eagerly at construction;
    the mapping never changes afterwards.
    """

    def __init__(self, loader: BaseLoader) -> None:
        env = Environment(loader=loader, keep_trailing_newline=True, autoescape=False)
        loaded: dict[str, Template] = {}
        for template_id in loader.list_templates():
            source, _, _ = loader.get_source(env, template_id)
            loaded[template_id] = Template(template_id, source)
        self._templates = MappingProxyType(loaded)

    @classmethod
    def from_directory(cls, template_dir: str | Path) -> "TemplateRegistry":
        """Load every file under *template_dir*; ids are POSIX relative paths."""
        path = Path(template_dir)
        if not path.is_dir():
            raise LayoutError(str(path), "template directory not found")
        return cls(FileSystemLoader(str(path), encoding="utf-8"))

    @classmethod
    def from_mapping(cls, templates: Mapping[str, str]) -> "TemplateRegistry":
        """Build a registry from an in-memory ``{template_id: text}`` mapping."""
        return cls(DictLoader(dict(templates)))

    def get_template(self, template_id: str) -> Template:
        """Return the template called *template_id*.

        Raises:
            UnknownTemplateError: If the registry has no such template.
        """
        try:
            return self._templates[template_id]
        except KeyError:
            raise UnknownTemplateError(template_id) from None

    def __getitem__(self, template_id: str) -> Template:
        return self._templates[template_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._templates)

    def __len__(self) -> int:
        return len(self._templates)


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Substitutes ``{{role:casing}}`` placeholders with bound case variants.

    Rendering is total and side-effect free: either every placeholder
    resolves and the full text is returned, or an error is raised and
    nothing is returned.
    """

    def render(self, template: Template, bindings: Mapping[str, CaseVariants]) -> str:
        """Render a registry template with *bindings* (``role -> CaseVariants``)."""
        return self.render_string(template.text, bindings, source=template.template_id)

    def render_string(
        self,
        text: str,
        bindings: Mapping[str, CaseVariants],
        *,
        source: str | None = None,
    ) -> str:
        """Render inline template text, e.g. a slot's path pattern.

        Raises:
            MalformedPlaceholderError: ``{{`` that is neither escape nor placeholder.
            UnboundPlaceholderError: A role with no entry in *bindings*.
            UnknownCasingError: A casing name that is not a CaseVariants field.
        """
        parts: list[str] = []
        for token in _scan(text, source):
            if token[0] == "text":
                parts.append(token[1])
                continue

            _, role, casing = token
            variants = bindings.get(role)
            if variants is None:
                raise UnboundPlaceholderError(role, source)
            value = variants.get(casing)
            if value is None:
                raise UnknownCasingError(casing, source)
            parts.append(value)
        return "".join(parts)
