from __future__ import annotations

import pytest

from injection_gen.codegen.core.types import Name, TypeDescriptor, Universe
from injection_gen.codegen.languages.go.generator import InformerInjectionGenerator

from tests._fixtures.universe import API_PACKAGE, build_generator, build_universe


@pytest.fixture
def universe() -> Universe:
    """A universe holding every package the informer template needs."""
    return build_universe()


@pytest.fixture
def widget(universe: Universe) -> TypeDescriptor:
    return universe.type(Name(API_PACKAGE, "Widget"))


@pytest.fixture
def generator(universe: Universe) -> InformerInjectionGenerator:
    return build_generator(universe)
