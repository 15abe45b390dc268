"""Exceptions raised at the boundaries of the engine."""


class CatalogError(RuntimeError):
    """A component catalog is missing, unreadable or empty."""


class IncompleteSelectionError(ValueError):
    """Analysis was requested before a CPU, GPU and RAM were all selected."""

    def __init__(self, missing=()):
        self.missing = tuple(missing)
        super().__init__("Please select all three components (CPU, GPU, RAM) before analyzing.")
