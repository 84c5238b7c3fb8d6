from infra.db.closing_document.mapper import closing_document_from_orm, closing_document_to_orm
from infra.db.closing_document.repository import SqlAlchemyClosingDocumentRepository

__all__ = [
    "closing_document_to_orm",
    "closing_document_from_orm",
    "SqlAlchemyClosingDocumentRepository",
]
