from linkstash.models.links import (
    CategorizedLink,
    LinkCreate,
    LinkUpdate,
    VocabularyEntry,
)
from linkstash.models.metadata import (
    CATEGORY_NAMES,
    CategorizeResponse,
    ClassificationResult,
    ExtractionResult,
    ExtractTitleResponse,
    LinkCategory,
    UrlRequest,
)

__all__ = [
    # Metadata pipeline
    "CATEGORY_NAMES",
    "CategorizeResponse",
    "ClassificationResult",
    "ExtractionResult",
    "ExtractTitleResponse",
    "LinkCategory",
    "UrlRequest",
    # Link storage
    "CategorizedLink",
    "LinkCreate",
    "LinkUpdate",
    "VocabularyEntry",
]
