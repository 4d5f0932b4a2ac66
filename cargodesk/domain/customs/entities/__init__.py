from .customs_declaration import (
    CustomsDeclaration,
    CustomsItem,
    CustomsShipmentType,
    DeclarationStatus,
    DeclarationType,
)

__all__ = [
    "CustomsDeclaration",
    "CustomsItem",
    "CustomsShipmentType",
    "DeclarationStatus",
    "DeclarationType",
]
