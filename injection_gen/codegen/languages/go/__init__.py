"""
Go code generator module.

Generates informer injection files for Go API types.
"""

from .generator import (
    InformerInjectionGenerator,
    SymbolBinding,
    create_informer_generator,
)
from .naming import (
    GO_RESERVED_WORDS,
    create_go_import_tracker,
    go_alias_candidates,
    go_package_name,
)
from .templates import GO_INFORMER_INJECTION_TEMPLATE, format_go_imports

__all__ = [
    "InformerInjectionGenerator",
    "SymbolBinding",
    "create_informer_generator",
    "GO_RESERVED_WORDS",
    "create_go_import_tracker",
    "go_alias_candidates",
    "go_package_name",
    "GO_INFORMER_INJECTION_TEMPLATE",
    "format_go_imports",
]
