"""
Language-specific code generators.

This module contains generators for different programming languages.
"""

from .go import InformerInjectionGenerator, create_informer_generator

__all__ = [
    "InformerInjectionGenerator",
    "create_informer_generator",
]
