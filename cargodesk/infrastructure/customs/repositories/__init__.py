from .customs_declaration_repository import CustomsDeclarationRepository

__all__ = ["CustomsDeclarationRepository"]
