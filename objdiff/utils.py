# objdiff/utils.py
# Small naming helpers shared by the registries and the exception messages.
# Leaf module: no objdiff imports.

from __future__ import annotations


def qualified_name(cls: type) -> str:
    """
    Return the fully-qualified name of a type: "module.QualName".

    Builtins are reported by bare name ("int", "list") so messages read
    naturally.
    """
    module = getattr(cls, "__module__", None)
    qualname = getattr(cls, "__qualname__", None) or getattr(cls, "__name__", None)
    if qualname is None:
        return repr(cls)
    if module in (None, "builtins"):
        return qualname
    return module + "." + qualname
