"""Named placeholder converters.

``{id:int}`` is shorthand for ``{id:\\d+}``; anything after the colon that
is not a registered converter name is used as a raw regex.
"""

DEFAULT_PATTERN = r"[^/]+"

# converter name -> regex
CONVERTERS: dict[str, str] = {
    "str": DEFAULT_PATTERN,
    "int": r"\d+",
    "float": r"\d+(?:\.\d+)?",
    "path": r".+",
}


def converter_pattern(spec: str) -> str:
    """Return the regex for a placeholder's sub-pattern spec.

    A registered converter name maps to its regex; any other string is
    returned unchanged.
    """
    return CONVERTERS.get(spec, spec)
