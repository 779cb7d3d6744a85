"""Tests for the Go informer injection generator."""

from __future__ import annotations

import io

import pytest

from injection_gen import generate_informer_injection
from injection_gen.codegen.core.config import load_config
from injection_gen.codegen.core.generator import generate_code
from injection_gen.codegen.core.tags import MalformedTagError
from injection_gen.codegen.core.templates import MissingPlaceholderError
from injection_gen.codegen.core.types import (
    GroupVersion,
    Name,
    Symbol,
    TypeDescriptor,
    Universe,
    UnknownSymbolError,
)
from injection_gen.codegen.languages.go.generator import InformerInjectionGenerator

from tests._fixtures.universe import (
    API_PACKAGE,
    CLIENTSET_PACKAGE,
    FACTORY_PACKAGE,
    INTERFACES_PACKAGE,
    TYPED_INFORMER_PACKAGE,
    build_generator,
)

EXPECTED_WIDGET_BODY = """
func init() {
	injection.RegisterInformer(withInformer)
}

// key is used for associating the Informer inside the context.Context.
type key struct{}

func withInformer(ctx context.Context) (context.Context, controller.Informer) {
	f := factory.Get(ctx)
	inf := f.Apps().V1().Widgets()
	return context.WithValue(ctx, key{}, inf), inf.Informer()
}

// Get extracts the typed informer from the context.
func Get(ctx context.Context) v1.WidgetInformer {
	untyped := ctx.Value(key{})
	if untyped == nil {
		return nil
	}
	return untyped.(v1.WidgetInformer)
}
"""

EXPECTED_IMPORTS = [
    'context "context"',
    f'v1 "{TYPED_INFORMER_PACKAGE}"',
    f'factory "{FACTORY_PACKAGE}"',
    'controller "github.com/knative/pkg/controller"',
    'injection "github.com/knative/pkg/injection"',
]


def test_renders_widget(generator: InformerInjectionGenerator, widget: TypeDescriptor) -> None:
    sink = io.StringIO()

    generator.generate_type(widget, sink)

    assert sink.getvalue() == EXPECTED_WIDGET_BODY
    assert generator.imports() == EXPECTED_IMPORTS


def test_fresh_generator_binds_before_any_render(
    universe: Universe, widget: TypeDescriptor
) -> None:
    generator = build_generator(universe)

    context = generator.build_context(widget)
    sink = io.StringIO()
    generator.generate_type(widget, sink)

    assert context["namespaced"] is True
    assert sink.getvalue() == EXPECTED_WIDGET_BODY


def test_validated_only_symbols_are_not_imported(
    generator: InformerInjectionGenerator, widget: TypeDescriptor
) -> None:
    generator.generate_type(widget, io.StringIO())

    joined = "\n".join(generator.imports())
    assert CLIENTSET_PACKAGE not in joined
    assert INTERFACES_PACKAGE not in joined


def test_filter_only_accepts_bound_type(
    universe: Universe, generator: InformerInjectionGenerator, widget: TypeDescriptor
) -> None:
    endpoints = universe.type(Name(API_PACKAGE, "Endpoints"))
    sink = io.StringIO()

    assert generator.filter(widget)
    assert not generator.filter(endpoints)

    generator.generate_type(endpoints, sink)

    assert sink.getvalue() == ""
    assert generator.imports() == []


def test_generate_code_skips_other_types(
    universe: Universe, generator: InformerInjectionGenerator
) -> None:
    result = generate_code(generator, universe.type(Name(API_PACKAGE, "Endpoints")))

    assert result.success
    assert result.skipped
    assert result.code == ""


def test_context_namespaced_flag(universe: Universe) -> None:
    widget_generator = build_generator(universe, "Widget")
    endpoints_generator = build_generator(universe, "Endpoints")

    widget_context = widget_generator.build_context(widget_generator.type_to_generate)
    endpoints_context = endpoints_generator.build_context(
        endpoints_generator.type_to_generate
    )

    assert widget_context["namespaced"] is True
    assert endpoints_context["namespaced"] is False


def test_context_contents(generator: InformerInjectionGenerator, widget: TypeDescriptor) -> None:
    context = generator.build_context(widget)

    assert context["type"] is widget
    assert context["group"] == "Apps"
    assert context["version"] == "V1"
    assert context["resource"] == "Widget"
    assert context["informerFor"] == "InformerFor"
    assert isinstance(context["clientSetInterface"], Symbol)
    assert context["informersTypedInformer"].name == Name(
        TYPED_INFORMER_PACKAGE, "WidgetInformer"
    )


def test_irregular_plural_in_output(universe: Universe) -> None:
    generator = build_generator(universe, "Endpoints")
    sink = io.StringIO()

    generator.generate_type(generator.type_to_generate, sink)

    assert "f.Apps().V1().Endpoints()" in sink.getvalue()
    assert "v1.EndpointsInformer" in sink.getvalue()


def test_naming_exception_overrides_accessor(universe: Universe, widget: TypeDescriptor) -> None:
    config = load_config(
        custom_config={"naming_exceptions": {f"{API_PACKAGE}.WidgetWidget": "WidgetResources"}}
    )
    generator = build_generator(universe, config=config)
    sink = io.StringIO()

    generator.generate_type(widget, sink)

    assert "f.Apps().V1().WidgetResources()" in sink.getvalue()


def test_resource_namer_honours_tag(universe: Universe) -> None:
    gizmo = universe.add_type(
        TypeDescriptor(Name(API_PACKAGE, "Gizmo"), comment_lines=["+resourceName=gizmoz"])
    )
    universe.add_package(TYPED_INFORMER_PACKAGE, types=["GizmoInformer"])
    generator = build_generator(universe, "Gizmo")

    assert generator.namers()["resource"].name(gizmo) == "gizmoz"
    assert generator.namers()["resource"].name(generator.type_to_generate) == "gizmoz"


def test_unknown_symbol_aborts_without_output(widget: TypeDescriptor) -> None:
    universe = Universe()
    universe.add_type(widget)
    generator = build_generator(universe)
    sink = io.StringIO()

    with pytest.raises(UnknownSymbolError):
        generator.generate_type(widget, sink)

    assert sink.getvalue() == ""


def test_required_symbols_are_sufficient(
    generator: InformerInjectionGenerator, widget: TypeDescriptor
) -> None:
    minimal = Universe.from_dict({"packages": generator.required_symbols()})
    minimal.add_type(widget)

    result = generate_code(build_generator(minimal), widget)

    assert result.success
    assert result.code == EXPECTED_WIDGET_BODY


def test_missing_clientset_is_reported_even_though_unused(
    generator: InformerInjectionGenerator, widget: TypeDescriptor
) -> None:
    required = generator.required_symbols()
    del required[CLIENTSET_PACKAGE]
    stripped = Universe.from_dict({"packages": required})
    stripped.add_type(widget)
    sink = io.StringIO()

    with pytest.raises(UnknownSymbolError) as excinfo:
        build_generator(stripped).generate_type(widget, sink)

    assert excinfo.value.package == CLIENTSET_PACKAGE
    assert sink.getvalue() == ""


def test_malformed_tag_propagates(universe: Universe) -> None:
    broken = universe.add_type(
        TypeDescriptor(Name(API_PACKAGE, "Broken"), comment_lines=["+genclient=true"])
    )
    generator = build_generator(universe, "Broken")
    sink = io.StringIO()

    with pytest.raises(MalformedTagError):
        generator.generate_type(broken, sink)

    result = generate_code(generator, broken)
    assert not result.success
    assert isinstance(result.exception, MalformedTagError)
    assert sink.getvalue() == ""


class _DroppingGenerator(InformerInjectionGenerator):
    def build_context(self, t):
        context = super().build_context(t)
        del context["factoryGet"]
        return context


def test_missing_placeholder_writes_nothing(universe: Universe, widget: TypeDescriptor) -> None:
    generator = _DroppingGenerator(
        output_package="example.com/out/widget",
        group_version=GroupVersion("apps", "v1"),
        group_go_name="apps",
        type_to_generate=widget,
        universe=universe,
        client_set_package=CLIENTSET_PACKAGE,
        internal_interfaces_package=INTERFACES_PACKAGE,
        typed_informer_package=TYPED_INFORMER_PACKAGE,
        group_informer_factory_package=FACTORY_PACKAGE,
    )
    sink = io.StringIO()

    with pytest.raises(MissingPlaceholderError) as excinfo:
        generator.generate_type(widget, sink)

    assert excinfo.value.missing == ["factoryGet"]
    assert sink.getvalue() == ""


def test_generation_is_idempotent(generator: InformerInjectionGenerator, widget: TypeDescriptor) -> None:
    first = generate_code(generator, widget)
    second = generate_code(generator, widget)

    assert first.success and second.success
    assert first.code == second.code
    assert first.imports == second.imports


def test_fresh_generators_agree(universe: Universe, widget: TypeDescriptor) -> None:
    first = generate_code(build_generator(universe), widget)
    second = generate_code(build_generator(universe), widget)

    assert first.code == second.code
    assert first.imports == second.imports


def test_required_symbols(generator: InformerInjectionGenerator) -> None:
    required = generator.required_symbols()

    assert required[FACTORY_PACKAGE]["functions"] == ["Get"]
    assert required[TYPED_INFORMER_PACKAGE]["types"] == ["WidgetInformer"]
    assert required["context"] == {
        "functions": ["WithValue"],
        "types": ["Context"],
        "variables": [],
    }


def test_render_file(generator: InformerInjectionGenerator, widget: TypeDescriptor) -> None:
    result = generate_code(generator, widget)

    text = generator.render_file(result)

    assert generator.filename == "widget.go"
    assert text.startswith("package widget\n\nimport (\n\tcontext \"context\"\n")
    assert text.endswith("return untyped.(v1.WidgetInformer)\n}\n")


def test_generate_informer_injection(universe: Universe) -> None:
    result = generate_informer_injection(
        universe,
        Name(API_PACKAGE, "Widget"),
        GroupVersion("apps.example.com", "v1"),
        "example.com/client/injection/informers",
        client_set_package=CLIENTSET_PACKAGE,
        internal_interfaces_package=INTERFACES_PACKAGE,
        typed_informer_package=TYPED_INFORMER_PACKAGE,
        group_informer_factory_package=FACTORY_PACKAGE,
    )

    assert result.success
    assert result.code == EXPECTED_WIDGET_BODY
    assert result.metadata["filename"] == "widget.go"
    assert result.metadata["package"] == "example.com/client/injection/informers/apps/v1/widget"
    assert result.metadata["file"].startswith("package widget\n")


def test_generate_informer_injection_unknown_type(universe: Universe) -> None:
    result = generate_informer_injection(
        universe,
        Name(API_PACKAGE, "Nope"),
        GroupVersion("apps", "v1"),
        "example.com/out",
        client_set_package=CLIENTSET_PACKAGE,
        internal_interfaces_package=INTERFACES_PACKAGE,
        typed_informer_package=TYPED_INFORMER_PACKAGE,
        group_informer_factory_package=FACTORY_PACKAGE,
    )

    assert not result.success
    assert "Nope" in result.error_message


def test_validate_reports_empty_packages(universe: Universe, widget: TypeDescriptor) -> None:
    generator = InformerInjectionGenerator(
        output_package="example.com/out/widget",
        group_version=GroupVersion("apps", "v1"),
        group_go_name="",
        type_to_generate=widget,
        universe=universe,
        client_set_package="",
        internal_interfaces_package=INTERFACES_PACKAGE,
        typed_informer_package=TYPED_INFORMER_PACKAGE,
        group_informer_factory_package=FACTORY_PACKAGE,
    )

    warnings = generator.validate()

    assert "client_set_package is empty" in warnings
    assert "group_go_name is empty" in warnings
