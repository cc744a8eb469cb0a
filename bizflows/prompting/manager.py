"""Prompt manager backed by Jinja2 templates."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

from jinja2 import (
    ChoiceLoader,
    Environment,
    FileSystemLoader,
    StrictUndefined,
    Template,
    TemplateNotFound,
    UndefinedError,
    meta,
)

from bizflows.exceptions import SchemaWiringError

DEFAULT_TEMPLATES_DIR = Path(__file__).parent / "templates"


class PromptManager:
    """Loads and renders named templates from one or more directories.

    Override directories are searched before the packaged templates, so a
    deployment can replace a single task's wording without forking the rest.
    Undefined placeholders raise instead of rendering as empty text.
    """

    def __init__(
        self,
        templates_dir: Optional[Path] = None,
        *,
        extra_dirs: Optional[Sequence[Path]] = None,
    ) -> None:
        base_dir = Path(templates_dir) if templates_dir else DEFAULT_TEMPLATES_DIR
        if not base_dir.exists():
            raise FileNotFoundError(
                f"Templates directory not found: {base_dir}"
            )

        paths = []
        for override in extra_dirs or ():
            override_path = Path(override)
            if not override_path.exists():
                raise FileNotFoundError(
                    f"Prompt override directory not found: {override_path}"
                )
            paths.append(override_path)
        paths.append(base_dir)

        self._base_dir = base_dir
        self._search_paths = tuple(paths)
        loaders = [FileSystemLoader(str(path)) for path in self._search_paths]
        self._env = Environment(
            loader=ChoiceLoader(loaders),
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
            keep_trailing_newline=False,
        )

    def render(self, template_name: str, **context) -> str:
        template = self._get_template(template_name)
        try:
            return template.render(**context)
        except UndefinedError as exc:
            raise SchemaWiringError(
                f"Template '{template_name}' references a missing field: {exc}"
            ) from exc

    def placeholders(self, template_name: str) -> frozenset[str]:
        """Return the variables ``template_name`` expects from its context."""

        source, _, _ = self._env.loader.get_source(self._env, template_name)
        parsed = self._env.parse(source)
        return frozenset(meta.find_undeclared_variables(parsed))

    def list_templates(self) -> list[str]:
        """Return the list of known template filenames."""
        return sorted(set(self._env.list_templates()))

    @property
    def templates_dir(self) -> Path:
        return self._base_dir

    @property
    def search_paths(self) -> tuple[Path, ...]:
        return self._search_paths

    def _get_template(self, template_name: str) -> Template:
        try:
            return self._env.get_template(template_name)
        except TemplateNotFound as exc:
            raise FileNotFoundError(
                f"Template '{template_name}' not found in {self.templates_dir}"
            ) from exc
