"""
Go informer injection generator.

Produces, for one API type, a file that registers the type's informer with
the injection framework and exposes a typed accessor for it.
"""

from typing import Any, Dict, List, NamedTuple, Optional, TextIO

from ...core.config import GeneratorConfig, load_config
from ...core.generator import CodeGenerator, GenerationResult, GeneratorError
from ...core.naming import (
    ExceptionNamer,
    NameSystems,
    RawNamer,
    TagOverrideNamer,
    all_lowercase_plural_namer,
    ic,
    public_plural_namer,
)
from ...core.imports import SymbolResolver
from ...core.tags import RESOURCE_NAME_TAG, parse_client_gen_tags
from ...core.types import GroupVersion, SymbolKind, TypeDescriptor, TypeUniverse
from ....logging_config import get_logger
from .naming import create_go_import_tracker, go_package_name, validate_go_package_name
from .templates import (
    GO_TEMPLATES,
    INFORMER_TEMPLATE_IDENTIFIERS,
    INFORMER_TEMPLATE_NAME,
    format_go_imports,
)

logger = get_logger(__name__)

CONTEXT_PACKAGE = "context"

INFORMER_FOR = "InformerFor"


class SymbolBinding(NamedTuple):
    """A template placeholder bound to an external symbol."""

    placeholder: str
    package: str
    name: str
    kind: SymbolKind


class InformerInjectionGenerator(CodeGenerator):
    """Generates the informer injection file for a single type."""

    def __init__(
        self,
        output_package: str,
        group_version: GroupVersion,
        group_go_name: str,
        type_to_generate: TypeDescriptor,
        universe: TypeUniverse,
        client_set_package: str,
        internal_interfaces_package: str,
        typed_informer_package: str,
        group_informer_factory_package: str,
        config: Optional[GeneratorConfig] = None,
    ):
        super().__init__(GO_TEMPLATES)

        if not output_package:
            raise GeneratorError("output_package is required")
        if type_to_generate is None:
            raise GeneratorError("type_to_generate is required")

        self.output_package = output_package
        self.group_version = group_version
        self.group_go_name = group_go_name
        self.type_to_generate = type_to_generate
        self.universe = universe
        self.client_set_package = client_set_package
        self.internal_interfaces_package = internal_interfaces_package
        self.typed_informer_package = typed_informer_package
        self.group_informer_factory_package = group_informer_factory_package
        self.config = config or load_config()

        self.import_tracker = create_go_import_tracker(
            output_package, reserved=INFORMER_TEMPLATE_IDENTIFIERS
        )
        self.resolver = SymbolResolver(universe, self.import_tracker, output_package)

    @property
    def language_name(self) -> str:
        return "go"

    @property
    def file_extension(self) -> str:
        return ".go"

    @property
    def filename(self) -> str:
        """Name of the file the driver should write the output to."""
        return self.type_to_generate.name.name.lower() + self.file_extension

    def filter(self, t: TypeDescriptor) -> bool:
        return t == self.type_to_generate

    def namers(self) -> NameSystems:
        plural_exceptions = self.config.plural_exceptions

        lowercase_namer = all_lowercase_plural_namer(plural_exceptions)

        public_plural = ExceptionNamer(
            exceptions=self.config.naming_exceptions,
            delegate=public_plural_namer(plural_exceptions),
        )

        return {
            "raw": RawNamer(self.output_package, self.import_tracker),
            "publicPlural": public_plural,
            "resource": TagOverrideNamer(RESOURCE_NAME_TAG, lowercase_namer),
        }

    def imports(self) -> List[str]:
        return self.import_tracker.import_lines()

    def symbol_bindings(self, t: TypeDescriptor) -> List[SymbolBinding]:
        """External symbols the template context refers to for t."""
        type_name = t.name.name
        return [
            SymbolBinding(
                "clientSetInterface", self.client_set_package, "Interface", SymbolKind.TYPE
            ),
            SymbolBinding(
                "contextContext", CONTEXT_PACKAGE, "Context", SymbolKind.TYPE
            ),
            SymbolBinding(
                "contextWithValue", CONTEXT_PACKAGE, "WithValue", SymbolKind.FUNCTION
            ),
            SymbolBinding(
                "controllerInformer",
                self.config.controller_package,
                "Informer",
                SymbolKind.TYPE,
            ),
            SymbolBinding(
                "factoryGet",
                self.group_informer_factory_package,
                "Get",
                SymbolKind.FUNCTION,
            ),
            SymbolBinding(
                "informersTypedInformer",
                self.typed_informer_package,
                type_name + "Informer",
                SymbolKind.TYPE,
            ),
            SymbolBinding(
                "injectionRegisterInformer",
                self.config.injection_package,
                "RegisterInformer",
                SymbolKind.FUNCTION,
            ),
            SymbolBinding(
                "interfacesSharedInformerFactory",
                self.internal_interfaces_package,
                "SharedInformerFactory",
                SymbolKind.TYPE,
            ),
        ]

    def required_symbols(self) -> Dict[str, Dict[str, List[str]]]:
        """
        Universe entries generation needs, grouped like Universe.from_dict.

        Useful for drivers assembling a universe by hand.
        """
        packages: Dict[str, Dict[str, List[str]]] = {}
        for binding in self.symbol_bindings(self.type_to_generate):
            entry = packages.setdefault(
                binding.package, {"functions": [], "types": [], "variables": []}
            )
            entry[binding.kind.value + "s"].append(binding.name)
        return packages

    def build_context(self, t: TypeDescriptor) -> Dict[str, Any]:
        """
        Bind everything the template needs for t.

        Placeholders the template renders are resolved and their packages
        imported; other bindings are only checked against the universe.

        Raises:
            MalformedTagError: If the type's comment tags are invalid
            UnknownSymbolError: If a bound symbol is missing from the universe
        """
        tags = parse_client_gen_tags(
            t.all_comment_lines, warn_unknown=self.config.warn_unknown_tags
        )

        source = self.template_engine.get_source(INFORMER_TEMPLATE_NAME)
        referenced = self.template_engine.placeholders(source, self.namers())

        context: Dict[str, Any] = {
            "group": ic(self.group_go_name),
            "informerFor": INFORMER_FOR,
            "namespaced": not tags.non_namespaced,
            "resource": ic(t.name.name),
            "type": t,
            "version": ic(self.group_version.version),
        }

        for binding in self.symbol_bindings(t):
            if binding.placeholder in referenced:
                symbol = self.resolver.resolve(
                    binding.package, binding.name, binding.kind
                )
            else:
                symbol = self.resolver.lookup(
                    binding.package, binding.name, binding.kind
                )
            context[binding.placeholder] = symbol

        return context

    def generate_type(self, t: TypeDescriptor, sink: TextIO) -> None:
        if not self.filter(t):
            logger.debug(
                "Skipping type %s, generator is bound to %s",
                t.name,
                self.type_to_generate.name,
            )
            return

        logger.debug("Processing type %s", t.name)

        context = self.build_context(t)
        code = self.render_template(INFORMER_TEMPLATE_NAME, context, self.namers())

        sink.write(self.format_code(code))

    def get_package_declaration(self) -> Optional[str]:
        return f"package {go_package_name(self.output_package)}"

    def render_file(self, result: GenerationResult) -> str:
        """Assemble package clause, import block and generated body."""
        parts = [self.get_package_declaration(), ""]

        imports_section = format_go_imports(result.imports)
        if imports_section:
            parts.extend([imports_section.rstrip(), ""])

        parts.append(result.code.strip("\n"))
        return "\n".join(parts) + "\n"

    def validate(self) -> List[str]:
        """Warnings about the generator's configuration."""
        warnings = [
            f"Output package: {error}"
            for error in validate_go_package_name(
                go_package_name(self.output_package)
            )
        ]

        for attr in (
            "client_set_package",
            "internal_interfaces_package",
            "typed_informer_package",
            "group_informer_factory_package",
        ):
            if not getattr(self, attr):
                warnings.append(f"{attr} is empty")

        if not self.group_go_name:
            warnings.append("group_go_name is empty")

        return warnings


def create_informer_generator(
    type_to_generate: TypeDescriptor,
    universe: TypeUniverse,
    group_version: GroupVersion,
    output_base: str,
    client_set_package: str,
    internal_interfaces_package: str,
    typed_informer_package: str,
    group_informer_factory_package: str,
    group_go_name: Optional[str] = None,
    config: Optional[GeneratorConfig] = None,
) -> InformerInjectionGenerator:
    """
    Create a generator writing into the conventional package layout.

    The output package is ``<output_base>/<group>/<version>/<type>``, with the
    group's first segment used when the group is a domain name.
    """
    group_segment = group_version.group.split(".", 1)[0] or "core"
    output_package = "/".join(
        [
            output_base.rstrip("/"),
            group_segment,
            group_version.version,
            type_to_generate.name.name.lower(),
        ]
    )

    return InformerInjectionGenerator(
        output_package=output_package,
        group_version=group_version,
        group_go_name=group_go_name or group_segment,
        type_to_generate=type_to_generate,
        universe=universe,
        client_set_package=client_set_package,
        internal_interfaces_package=internal_interfaces_package,
        typed_informer_package=typed_informer_package,
        group_informer_factory_package=group_informer_factory_package,
        config=config,
    )
