"""Rule lines passed to the reachability engine."""

from pathlib import Path

# First pass: enumerate classes only, nothing is removed or rewritten.
ENUMERATION_RULES = [
    "-dontshrink",
    "-dontoptimize",
    "-dontobfuscate",
    "-ignorewarnings",
    "-dontwarn",
]

# Second pass: shrinking stays on, everything else is off.
SHRINK_RULES = [
    "-dontoptimize",
    "-dontobfuscate",
    "-ignorewarnings",
]


def keep_class_rule(external: str) -> str:
    """Rule retaining a class and all of its members."""
    return f"-keep class {external} {{ *; }}"


def print_usage_rule(path: Path) -> str:
    """Rule directing the usage log to a file."""
    return f"-printusage '{path}'"
