from .customs_declaration_repository import CustomsDeclarationRepositoryProtocol

__all__ = ["CustomsDeclarationRepositoryProtocol"]
