"""
Template engine wrapper for code generation.

Provides a simple interface for Jinja2 template rendering
with common utilities for code generation.
"""

from typing import Dict, Any, Optional
from pathlib import Path

from jinja2 import (
    DictLoader,
    Environment,
    FileSystemLoader,
    StrictUndefined,
    TemplateNotFound,
)
from jinja2 import TemplateError as JinjaTemplateError

from .naming import NamingCase, NameSanitizer


class TemplateError(Exception):
    """Exception raised for template-related errors."""

    pass


class TemplateEngine:
    """Wrapper for Jinja2 template engine with code generation utilities."""

    def __init__(
        self,
        template_dir: Optional[Path] = None,
        sanitizer: Optional[NameSanitizer] = None,
    ):
        """
        Initialize template engine.

        Args:
            template_dir: Directory containing template files
            sanitizer: Sanitizer backing the naming filters
        """
        self.template_dir = template_dir
        self.sanitizer = sanitizer or NameSanitizer()
        self._env = None
        self._setup_environment()

    def _setup_environment(self):
        """Setup Jinja2 environment with code generation utilities."""
        if self.template_dir and self.template_dir.exists():
            loader = FileSystemLoader(str(self.template_dir))
        else:
            # Use in-memory templates
            loader = DictLoader({})

        self._env = Environment(
            loader=loader,
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )

        # Add custom filters for code generation
        self._env.filters["kebab_case"] = self._kebab_case_filter
        self._env.filters["pascal_case"] = self._pascal_case_filter
        self._env.filters["type_name"] = self.sanitizer.to_type_name
        self._env.filters["sanitize"] = self.sanitizer.sanitize_name
        self._env.filters["indent"] = self._indent_filter
        self._env.filters["comment"] = self._comment_filter

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a template with the given context.

        Args:
            template_name: Name of template file
            context: Variables to pass to template

        Returns:
            Rendered template content
        """
        try:
            template = self._env.get_template(template_name)
            return template.render(**context)
        except JinjaTemplateError as e:
            raise TemplateError(
                f"Failed to render template {template_name}: {str(e)}"
            ) from e

    def render_string(self, template_string: str, context: Dict[str, Any]) -> str:
        """
        Render a template string with the given context.

        Args:
            template_string: Template content as string
            context: Variables to pass to template

        Returns:
            Rendered content
        """
        try:
            template = self._env.from_string(template_string)
            return template.render(**context)
        except JinjaTemplateError as e:
            raise TemplateError(f"Failed to render template string: {str(e)}") from e

    def template_exists(self, template_name: str) -> bool:
        """Check if a template exists."""
        try:
            self._env.get_template(template_name)
        except TemplateNotFound:
            return False
        return True

    def add_template(self, name: str, content: str):
        """
        Add an in-memory template.

        Args:
            name: Template name
            content: Template content
        """
        if not isinstance(self._env.loader, DictLoader):
            # Convert to DictLoader to support in-memory templates
            self._env.loader = DictLoader({})

        self._env.loader.mapping[name] = content

    # Template filters for code generation

    def _kebab_case_filter(self, value: str) -> str:
        """Convert string to kebab-case."""
        return self.sanitizer.convert_case(str(value), NamingCase.KEBAB_CASE)

    def _pascal_case_filter(self, value: str) -> str:
        """Convert string to PascalCase."""
        return self.sanitizer.convert_case(str(value), NamingCase.PASCAL_CASE)

    def _indent_filter(self, value: str, spaces: int = 4, first: bool = False) -> str:
        """Indent lines in a string; the first line only when ``first`` is set."""
        indent = " " * spaces
        lines = str(value).split("\n")
        indented = [indent + line if line.strip() else line for line in lines]
        if not first and lines:
            indented[0] = lines[0]
        return "\n".join(indented)

    def _comment_filter(self, value: str, style: str = "///") -> str:
        """Add comment markers to each line."""
        lines = str(value).split("\n")
        return "\n".join(f"{style} {line}" if line.strip() else style for line in lines)


def create_template_engine(
    template_dir: Optional[Path] = None, sanitizer: Optional[NameSanitizer] = None
) -> TemplateEngine:
    """Create a template engine, optionally bound to a template directory."""
    return TemplateEngine(template_dir, sanitizer)
