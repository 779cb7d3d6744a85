"""
Templates for Go injection code.
"""

INFORMER_TEMPLATE_NAME = "informer.go"

# Registers an informer constructor at init time and exposes a context
# accessor. The informer is stored under a private key type so only Get can
# read it back; Get returns nil when nothing was stored.
GO_INFORMER_INJECTION_TEMPLATE = """
func init() {
	{{ injectionRegisterInformer | raw }}(withInformer)
}

// key is used for associating the Informer inside the context.Context.
type key struct{}

func withInformer(ctx {{ contextContext | raw }}) ({{ contextContext | raw }}, {{ controllerInformer | raw }}) {
	f := {{ factoryGet | raw }}(ctx)
	inf := f.{{ group }}().{{ version }}().{{ type | publicPlural }}()
	return {{ contextWithValue | raw }}(ctx, key{}, inf), inf.Informer()
}

// Get extracts the typed informer from the context.
func Get(ctx {{ contextContext | raw }}) {{ informersTypedInformer | raw }} {
	untyped := ctx.Value(key{})
	if untyped == nil {
		return nil
	}
	return untyped.({{ informersTypedInformer | raw }})
}
"""

# Identifiers the informer template declares; import aliases must avoid them
INFORMER_TEMPLATE_IDENTIFIERS = frozenset(
    {"Get", "ctx", "f", "inf", "init", "key", "untyped", "withInformer"}
)

GO_TEMPLATES = {
    INFORMER_TEMPLATE_NAME: GO_INFORMER_INJECTION_TEMPLATE,
}


def format_go_imports(imports: list[str]) -> str:
    """Format import lines as a Go import block."""
    if not imports:
        return ""

    if len(imports) == 1:
        return f"import {imports[0]}\n"

    lines = ["import ("]
    for imp in imports:
        lines.append(f"\t{imp}")
    lines.append(")\n")

    return "\n".join(lines)
