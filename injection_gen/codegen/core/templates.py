"""
Template engine wrapper for code generation.

Provides a simple interface for Jinja2 template rendering where naming
systems are available as filters, e.g. ``{{ type | publicPlural }}``.
"""

from typing import Any, Dict, List, Optional, Set

from jinja2 import (
    DictLoader,
    Environment,
    StrictUndefined,
    TemplateNotFound,
    TemplateSyntaxError,
    UndefinedError,
    meta,
    pass_context,
)

from ...logging_config import get_logger
from .naming import NameSystems

logger = get_logger(__name__)

NAME_SYSTEMS_KEY = "_name_systems"


class TemplateError(Exception):
    """Exception raised for template-related errors."""

    pass


class MissingPlaceholderError(TemplateError):
    """A template references placeholders the context does not provide."""

    def __init__(self, missing: List[str], template_name: str = "<string>"):
        self.missing = sorted(missing)
        self.template_name = template_name
        super().__init__(
            f"Template {template_name} references missing placeholders: "
            f"{', '.join(self.missing)}"
        )


def _namer_filter(system: str):
    """Build a filter that names its argument with the given name system."""

    @pass_context
    def apply(context, value):
        name_systems = context.get(NAME_SYSTEMS_KEY) or {}
        namer = name_systems.get(system)
        if namer is None:
            raise TemplateError(f"No name system {system!r} supplied for rendering")
        return namer.name(value)

    return apply


class TemplateEngine:
    """Wrapper for Jinja2 template engine with code generation utilities."""

    def __init__(self, templates: Optional[Dict[str, str]] = None):
        """
        Initialize template engine.

        Args:
            templates: In-memory templates keyed by name
        """
        self._env = Environment(
            loader=DictLoader(dict(templates or {})),
            autoescape=False,
            undefined=StrictUndefined,
            keep_trailing_newline=True,
        )

    def add_template(self, name: str, content: str):
        """
        Add an in-memory template.

        Args:
            name: Template name
            content: Template content
        """
        self._env.loader.mapping[name] = content

    def template_exists(self, name: str) -> bool:
        """Check if a template exists."""
        return name in self._env.loader.mapping

    def get_source(self, name: str) -> str:
        try:
            return self._env.loader.get_source(self._env, name)[0]
        except TemplateNotFound:
            raise TemplateError(f"Template not found: {name}")

    def placeholders(
        self, template_string: str, name_systems: Optional[NameSystems] = None
    ) -> Set[str]:
        """
        Top-level variables a template string references.

        Finding them compiles the template, so the name systems it uses as
        filters must be supplied here too.

        Raises:
            TemplateError: If the template does not compile
        """
        self._register_name_systems(name_systems or {})
        try:
            ast = self._env.parse(template_string)
            return set(meta.find_undeclared_variables(ast))
        except TemplateSyntaxError as e:
            raise TemplateError(f"Invalid template: {e}")

    def _register_name_systems(self, name_systems: NameSystems):
        for system in name_systems:
            if system not in self._env.filters:
                self._env.filters[system] = _namer_filter(system)

    def render_string(
        self,
        template_string: str,
        context: Dict[str, Any],
        name_systems: Optional[NameSystems] = None,
        template_name: str = "<string>",
    ) -> str:
        """
        Render a template string with the given context.

        Args:
            template_string: Template content as string
            context: Variables to pass to template
            name_systems: Namers exposed as filters, keyed by filter name
            template_name: Name used in error messages

        Returns:
            Rendered content

        Raises:
            MissingPlaceholderError: If the context lacks a referenced placeholder
            TemplateError: For any other rendering failure
        """
        name_systems = name_systems or {}
        missing = self.placeholders(template_string, name_systems) - set(context)
        if missing:
            raise MissingPlaceholderError(list(missing), template_name)

        logger.debug("Rendering template %s", template_name)
        try:
            template = self._env.from_string(template_string)
            return template.render(**context, **{NAME_SYSTEMS_KEY: name_systems})
        except UndefinedError as e:
            raise MissingPlaceholderError([str(e)], template_name)
        except TemplateError:
            raise
        except TemplateSyntaxError as e:
            raise TemplateError(f"Failed to compile template {template_name}: {e}")

    def render_template(
        self,
        template_name: str,
        context: Dict[str, Any],
        name_systems: Optional[NameSystems] = None,
    ) -> str:
        """
        Render a registered template with context.

        Args:
            template_name: Template name
            context: Template variables
            name_systems: Namers exposed as filters

        Returns:
            Rendered content
        """
        source = self.get_source(template_name)
        return self.render_string(source, context, name_systems, template_name)


def create_template_engine(templates: Optional[Dict[str, str]] = None) -> TemplateEngine:
    """Create a template engine preloaded with in-memory templates."""
    return TemplateEngine(templates)
