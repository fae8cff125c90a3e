from __future__ import annotations


class RenderError(Exception):
    """The output sink rejected a write; the partially rendered text must be discarded."""


class DuplicateModuleError(ValueError):
    """A module with the same name already exists in the scope.

    Raised at the call that introduced the duplicate. Generators should use
    ``get_or_create_module`` when a module may already be present.
    """

    def __init__(self, name: str) -> None:
        super().__init__(f"module `{name}` is already defined in this scope")
        self.name = name
