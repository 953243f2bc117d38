"""
Base generator interface for all code generation targets.

Defines the contract that language generators implement, the exception
hierarchy and the error-handling wrapper around a generation run.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Any, Optional
from pathlib import Path

from ...logging_config import get_logger
from .config import GeneratorConfig
from .naming import NameSanitizer
from .templates import TemplateEngine, create_template_engine

logger = get_logger(__name__)


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


class TranslationError(GeneratorError):
    """Raised when a schema cannot be translated under the active settings."""

    pass


class CyclicSchemaError(TranslationError):
    """Raised when a schema node is reached again while it is being translated."""

    pass


class UnsupportedCompositionError(TranslationError):
    """Raised in strict mode for compositions without a target representation."""

    pass


class CodeGenerator(ABC):
    """Abstract base class for all code generators."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize generator with optional configuration."""
        self.config = config or GeneratorConfig()
        self._template_engine = None
        self._setup_templates()

    def _setup_templates(self):
        """Setup template engine for this generator."""
        self._template_engine = create_template_engine(
            self.get_template_directory(), self.get_name_sanitizer()
        )

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the name of the target language (e.g., 'wit')."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the file extension for generated files (e.g., '.wit')."""
        pass

    def get_name_sanitizer(self) -> Optional[NameSanitizer]:
        """Return the sanitizer backing the naming template filters."""
        return None

    def get_template_directory(self) -> Optional[Path]:
        """
        Return the directory containing templates for this generator.

        Return None to use in-memory templates only.
        """
        return None

    @property
    def template_engine(self) -> TemplateEngine:
        """Get the template engine for this generator."""
        if self._template_engine is None:
            self._setup_templates()
        return self._template_engine

    @abstractmethod
    def generate(self, document: Dict[str, Any]) -> str:
        """
        Generate code for an API description.

        Args:
            document: Parsed API description

        Returns:
            Generated code as a string
        """
        pass

    def generate_supporting_files(self, document: Dict[str, Any]) -> Dict[str, str]:
        """
        Generate additional files shipped next to the main output.

        Returns:
            Mapping of relative file name to content
        """
        return {}

    def validate_document(self, document: Dict[str, Any]) -> List[str]:
        """
        Check the document for constructs that translate with degradations.

        Returns:
            List of warning messages (empty if no issues)
        """
        return []

    def output_file_name(self) -> str:
        """File name of the main generated file."""
        return f"{self.config.project_name}{self.file_extension}"

    def format_code(self, code: str) -> str:
        """
        Apply basic formatting to generated code.

        Trailing whitespace is removed and runs of blank lines are limited
        to one.
        """
        formatted_lines = []
        blank_count = 0

        for line in code.split("\n"):
            stripped = line.rstrip()
            if not stripped:
                blank_count += 1
                if blank_count <= 1:
                    formatted_lines.append("")
            else:
                blank_count = 0
                formatted_lines.append(stripped)

        return "\n".join(formatted_lines).strip("\n") + "\n"

    # Template helper methods

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """Render a template with context."""
        return self.template_engine.render_template(template_name, context)

    def template_exists(self, template_name: str) -> bool:
        """Check if a template exists."""
        return self.template_engine.template_exists(template_name)


class GenerationResult:
    """Container for generation results and metadata."""

    def __init__(
        self,
        code: str,
        warnings: List[str] = None,
        metadata: Dict[str, Any] = None,
        files: Dict[str, str] = None,
    ):
        """
        Initialize generation result.

        Args:
            code: Generated code
            warnings: Any warnings from generation
            metadata: Additional metadata about generation
            files: Supporting files keyed by relative file name
        """
        self.code = code
        self.warnings = warnings or []
        self.metadata = metadata or {}
        self.files = files or {}
        self.success = True
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


def generate_code(
    generator: CodeGenerator, document: Dict[str, Any]
) -> GenerationResult:
    """
    Generate code using the specified generator with error handling.

    Args:
        generator: Code generator instance
        document: Parsed API description

    Returns:
        GenerationResult with code, supporting files, warnings, and metadata
    """
    try:
        warnings = generator.validate_document(document)
        for warning in warnings:
            logger.warning(warning)

        code = generator.format_code(generator.generate(document))
        files = generator.generate_supporting_files(document)

        metadata = {
            "language": generator.language_name,
            "file_extension": generator.file_extension,
            "output_file": generator.output_file_name(),
            "package_name": generator.config.package_name,
            "schema_count": len(document.get("components", {}).get("schemas", {})),
            "path_count": len(document.get("paths", {})),
        }

        return GenerationResult(code, warnings, metadata, files)

    except Exception as e:
        logger.error("Code generation failed: %s", e, exc_info=True)
        return GenerationResult.error(f"Code generation failed: {str(e)}", exception=e)
