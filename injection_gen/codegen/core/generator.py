"""
Base generator interface for all code generation targets.

Defines the contract that all generators must implement: a generator is bound
to one target type, filters the universe down to it, supplies naming systems,
writes the rendered code for the type and reports the imports that code needs.
"""

import io
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, TextIO

from .naming import NameSystems
from .templates import TemplateEngine, create_template_engine
from .types import TypeDescriptor


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


class CodeGenerator(ABC):
    """Abstract base class for all code generators."""

    def __init__(self, templates: Optional[Dict[str, str]] = None):
        """Initialize generator with its in-memory templates."""
        self._template_engine = create_template_engine(templates)

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the name of the target language (e.g., 'go')."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the file extension for generated files (e.g., '.go')."""
        pass

    @property
    def template_engine(self) -> TemplateEngine:
        """Get the template engine for this generator."""
        return self._template_engine

    @abstractmethod
    def filter(self, t: TypeDescriptor) -> bool:
        """Return True if this generator produces code for t."""
        pass

    @abstractmethod
    def namers(self) -> NameSystems:
        """Return the naming systems templates may use as filters."""
        pass

    @abstractmethod
    def generate_type(self, t: TypeDescriptor, sink: TextIO) -> None:
        """
        Write the code for one type.

        Nothing is written unless rendering succeeds.

        Args:
            t: Type to generate code for
            sink: Destination for the rendered text
        """
        pass

    def imports(self) -> List[str]:
        """
        Get the import lines the generated code requires.

        Returns:
            List of import lines (can be empty)
        """
        return []

    def get_package_declaration(self) -> Optional[str]:
        """
        Get package/namespace declaration if needed.

        Returns:
            Package declaration string or None
        """
        return None

    def format_code(self, code: str) -> str:
        """
        Apply language-specific formatting to generated code.

        Args:
            code: Raw generated code

        Returns:
            Formatted code
        """
        # Basic cleanup - remove excessive blank lines
        lines = code.split("\n")
        formatted_lines = []
        blank_count = 0

        for line in lines:
            stripped = line.rstrip()
            if not stripped:
                blank_count += 1
                if blank_count <= 2:  # Allow max 2 consecutive blank lines
                    formatted_lines.append("")
            else:
                blank_count = 0
                formatted_lines.append(stripped)

        return "\n".join(formatted_lines)

    def render_template(
        self,
        template_name: str,
        context: Dict[str, Any],
        name_systems: Optional[NameSystems] = None,
    ) -> str:
        """
        Render a template with context.

        Args:
            template_name: Template name
            context: Template variables
            name_systems: Namers exposed as template filters

        Returns:
            Rendered content
        """
        return self.template_engine.render_template(
            template_name, context, name_systems
        )

    def template_exists(self, template_name: str) -> bool:
        """Check if a template exists."""
        return self.template_engine.template_exists(template_name)


class GenerationResult:
    """Container for generation results and metadata."""

    def __init__(
        self,
        code: str,
        imports: List[str] = None,
        warnings: List[str] = None,
        metadata: Dict[str, Any] = None,
    ):
        """
        Initialize generation result.

        Args:
            code: Generated code
            imports: Import lines the code requires
            warnings: Any warnings from generation
            metadata: Additional metadata about generation
        """
        self.code = code
        self.imports = imports or []
        self.warnings = warnings or []
        self.metadata = metadata or {}
        self.success = True
        self.skipped = False
        self.error_message: Optional[str] = None
        self.exception: Optional[Exception] = None

    @classmethod
    def error(cls, message: str, exception: Exception = None) -> "GenerationResult":
        """Create a failed generation result."""
        result = cls(code="")
        result.success = False
        result.error_message = message
        result.exception = exception
        return result

    @classmethod
    def skip(cls, message: str) -> "GenerationResult":
        """Create a result for a type the generator does not apply to."""
        result = cls(code="")
        result.skipped = True
        result.warnings.append(message)
        return result


def generate_code(generator: CodeGenerator, t: TypeDescriptor) -> GenerationResult:
    """
    Generate code for one type with error handling.

    Failures are reported in the result with the original exception attached;
    nothing is partially rendered.

    Args:
        generator: Code generator instance
        t: Type to generate code for

    Returns:
        GenerationResult with code, imports and metadata
    """
    if not generator.filter(t):
        return GenerationResult.skip(f"Generator does not apply to {t.name}")

    sink = io.StringIO()
    try:
        generator.generate_type(t, sink)
    except Exception as e:
        return GenerationResult.error(
            f"Code generation failed for {t.name}: {e}", exception=e
        )

    metadata = {
        "language": generator.language_name,
        "file_extension": generator.file_extension,
        "type": str(t.name),
    }

    return GenerationResult(sink.getvalue(), generator.imports(), metadata=metadata)
