from .customs_declaration_use_case import CustomsDeclarationUseCase

__all__ = ["CustomsDeclarationUseCase"]
