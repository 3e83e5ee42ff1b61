class NameDropperError(Exception):
    """Base class for annotation pipeline errors."""


class NoSelection(NameDropperError):
    """No text span is selected; there is nothing to annotate."""


class EmptyResult(NameDropperError):
    """The annotator recognized no resources in the submitted text."""


class ServiceError(NameDropperError):
    """The annotation service could not be reached or its response could not be parsed."""


class ReconciliationMiss(NameDropperError):
    """A normalized surface form could not be located in the original text."""

    def __init__(self, surface_form: str, offset: int) -> None:
        super().__init__(f"{surface_form!r} not found at offset {offset}")
        self.surface_form = surface_form
        self.offset = offset
