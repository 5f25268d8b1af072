"""
Application Use Case - Document Extraction

Validates an uploaded document and forwards it to the OCR service. The
upload stream is always closed before the use case returns or raises.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import BinaryIO, FrozenSet, Iterable, Optional

import structlog

from bizintel.application.dtos.ai_dto import DocumentExtractionDTO
from bizintel.domain.entities.errors import ValidationError
from bizintel.domain.gateways.ai_service_gateway import IAIServiceGateway

logger = structlog.get_logger(__name__)

DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024
DEFAULT_ALLOWED_MIME_TYPES = frozenset({"image/jpeg", "image/png", "application/pdf"})
DEFAULT_ALLOWED_EXTENSIONS = frozenset({"jpeg", "jpg", "png", "pdf"})
DEFAULT_DOCUMENT_TYPE = "invoice"


@dataclass
class UploadedDocument:
    """Raw bytes handed over by the file-intake layer."""

    stream: BinaryIO
    mime_type: Optional[str]
    filename: Optional[str] = None
    document_type: str = DEFAULT_DOCUMENT_TYPE


def normalize_mime_type(mime_type: Optional[str]) -> str:
    return (mime_type or "").split(";", 1)[0].strip().lower()


def file_extension(filename: Optional[str]) -> str:
    """Lower-cased extension without the dot, or an empty string."""
    name = (filename or "").strip()
    if "." not in name:
        return ""
    return name.rsplit(".", 1)[1].lower()


class ExtractDocumentUseCase:
    """Runs OCR and field extraction on one uploaded document."""

    def __init__(
        self,
        ai_gateway: IAIServiceGateway,
        max_file_size: int = DEFAULT_MAX_FILE_SIZE,
        allowed_mime_types: Iterable[str] = DEFAULT_ALLOWED_MIME_TYPES,
        allowed_extensions: Iterable[str] = DEFAULT_ALLOWED_EXTENSIONS,
    ):
        self.ai_gateway = ai_gateway
        self.max_file_size = max_file_size
        self.allowed_mime_types: FrozenSet[str] = frozenset(
            normalize_mime_type(item) for item in allowed_mime_types
        )
        self.allowed_extensions: FrozenSet[str] = frozenset(
            item.lower().lstrip(".") for item in allowed_extensions
        )

    async def execute(self, document: UploadedDocument) -> DocumentExtractionDTO:
        try:
            mime_type = normalize_mime_type(document.mime_type)
            if mime_type not in self.allowed_mime_types:
                raise ValidationError(
                    "Only images and PDF files are allowed for OCR processing",
                    {
                        "mime_type": document.mime_type,
                        "allowed": sorted(self.allowed_mime_types),
                    },
                )
            if file_extension(document.filename) not in self.allowed_extensions:
                raise ValidationError(
                    "Only images and PDF files are allowed for OCR processing",
                    {
                        "filename": document.filename,
                        "allowed_extensions": sorted(self.allowed_extensions),
                    },
                )

            content = document.stream.read(self.max_file_size + 1)
            if not content:
                raise ValidationError("No document file provided")
            if len(content) > self.max_file_size:
                raise ValidationError(
                    "Document exceeds the maximum allowed size",
                    {"max_file_size": self.max_file_size},
                )

            logger.info(
                "document.extract.start",
                filename=document.filename,
                mime_type=mime_type,
                size=len(content),
                document_type=document.document_type,
            )
            extraction = await self.ai_gateway.extract_document(
                content, mime_type, document.document_type
            )
        finally:
            document.stream.close()

        return DocumentExtractionDTO.from_domain(
            extraction, document.document_type, document.filename
        )
