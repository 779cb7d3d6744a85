"""
Core code generation components.

Provides base classes and utilities used by all language generators.
"""

from .generator import CodeGenerator, GeneratorError, GenerationResult, generate_code
from .types import (
    GroupVersion,
    Name,
    Symbol,
    SymbolKind,
    TypeDescriptor,
    TypeUniverse,
    Universe,
    UnknownSymbolError,
)
from .tags import MalformedTagError, Tags, extract_comment_tags, parse_client_gen_tags
from .naming import (
    ExceptionNamer,
    Namer,
    NameSystems,
    PluralNamer,
    RawNamer,
    TagOverrideNamer,
    all_lowercase_plural_namer,
    naming_key,
    pluralize,
    private_plural_namer,
    public_plural_namer,
)
from .imports import ImportTracker, SymbolResolver
from .config import GeneratorConfig, ConfigManager, ConfigError, load_config
from .templates import (
    MissingPlaceholderError,
    TemplateEngine,
    TemplateError,
    create_template_engine,
)

__all__ = [
    # Base generator interface
    "CodeGenerator",
    "GeneratorError",
    "GenerationResult",
    "generate_code",
    # Type universe
    "GroupVersion",
    "Name",
    "Symbol",
    "SymbolKind",
    "TypeDescriptor",
    "TypeUniverse",
    "Universe",
    "UnknownSymbolError",
    # Comment tags
    "MalformedTagError",
    "Tags",
    "extract_comment_tags",
    "parse_client_gen_tags",
    # Naming systems
    "ExceptionNamer",
    "Namer",
    "NameSystems",
    "PluralNamer",
    "RawNamer",
    "TagOverrideNamer",
    "all_lowercase_plural_namer",
    "naming_key",
    "pluralize",
    "private_plural_namer",
    "public_plural_namer",
    # Imports
    "ImportTracker",
    "SymbolResolver",
    # Configuration system
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Template system
    "MissingPlaceholderError",
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
]
