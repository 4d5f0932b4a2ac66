"""Customs domain exceptions."""

from cargodesk.domain.common.exceptions import EntityNotFoundError


class CustomsDeclarationNotFoundError(EntityNotFoundError):
    """Raised when a customs declaration cannot be found."""

    def __init__(self, declaration_id: int) -> None:
        super().__init__("Customs declaration", declaration_id)
