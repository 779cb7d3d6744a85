"""
Injection Code Generation Module

Generates informer injection code for API types described by a type universe.
"""

from .core.generator import CodeGenerator, GenerationResult, generate_code
from .core.types import (
    GroupVersion,
    Name,
    Symbol,
    SymbolKind,
    TypeDescriptor,
    Universe,
)
from .core.config import GeneratorConfig, ConfigManager, load_config
from .languages.go import InformerInjectionGenerator, create_informer_generator

__all__ = [
    "CodeGenerator",
    "GenerationResult",
    "generate_code",
    "GroupVersion",
    "Name",
    "Symbol",
    "SymbolKind",
    "TypeDescriptor",
    "Universe",
    "GeneratorConfig",
    "ConfigManager",
    "load_config",
    "InformerInjectionGenerator",
    "create_informer_generator",
]
