from .models import ProjectClosingDocuments
from .service import ClosingDocumentService

__all__ = ["ClosingDocumentService", "ProjectClosingDocuments"]
