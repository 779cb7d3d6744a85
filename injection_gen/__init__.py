"""
injection-gen

Generates companion Go files that register API types' informers with the
injection framework.
"""

from typing import Any, Dict, Optional, Union

from .codegen import (
    GenerationResult,
    GroupVersion,
    InformerInjectionGenerator,
    Name,
    TypeDescriptor,
    Universe,
    create_informer_generator,
    generate_code,
    load_config,
)
from .logging_config import get_logger, setup_logging

__version__ = "0.1.0"


def generate_informer_injection(
    universe: Universe,
    type_name: Union[Name, TypeDescriptor],
    group_version: GroupVersion,
    output_base: str,
    client_set_package: str,
    internal_interfaces_package: str,
    typed_informer_package: str,
    group_informer_factory_package: str,
    config: Optional[Dict[str, Any]] = None,
) -> GenerationResult:
    """
    Generate the injection file for one type of the universe.

    Args:
        universe: Known packages and types
        type_name: The type, or its name in the universe
        group_version: API group and version of the type
        output_base: Package path generated packages are nested under
        client_set_package: Package of the clientset interface
        internal_interfaces_package: Package of the shared informer interfaces
        typed_informer_package: Package of the typed informers
        group_informer_factory_package: Package of the injected informer factory
        config: Configuration overrides

    Returns:
        GenerationResult with the body, imports and the assembled file in
        ``metadata["file"]``
    """
    if isinstance(type_name, TypeDescriptor):
        descriptor = type_name
    else:
        descriptor = universe.type(type_name)
        if descriptor is None:
            return GenerationResult.error(f"Type {type_name} is not in the universe")

    generator = create_informer_generator(
        descriptor,
        universe,
        group_version,
        output_base,
        client_set_package=client_set_package,
        internal_interfaces_package=internal_interfaces_package,
        typed_informer_package=typed_informer_package,
        group_informer_factory_package=group_informer_factory_package,
        config=load_config(custom_config=config),
    )

    result = generate_code(generator, descriptor)
    if result.success:
        result.metadata["filename"] = generator.filename
        result.metadata["package"] = generator.output_package
        result.metadata["file"] = generator.render_file(result)
    return result


__all__ = [
    "GenerationResult",
    "GroupVersion",
    "InformerInjectionGenerator",
    "Name",
    "TypeDescriptor",
    "Universe",
    "generate_code",
    "generate_informer_injection",
    "get_logger",
    "setup_logging",
    "__version__",
]
