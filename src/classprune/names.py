"""Conversion between internal (descriptor) and external (dotted) class names.

No validation is performed: ill-formed input maps to ill-formed output.
"""


def external_name(internal: str) -> str:
    """Convert ``Lcom/foo/Bar;`` or ``com/foo/Bar`` to ``com.foo.Bar``."""
    if internal.startswith("L") and internal.endswith(";"):
        internal = internal[1:-1]
    return internal.replace("/", ".")


def internal_name(external: str) -> str:
    """Convert ``com.foo.Bar`` to ``com/foo/Bar``."""
    return external.replace(".", "/")


def descriptor(internal: str) -> str:
    """Wrap an internal name as a type descriptor (``Lcom/foo/Bar;``)."""
    return f"L{internal};"
