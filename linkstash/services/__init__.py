from linkstash.services.classifier import (
    LinkClassifier,
    get_link_classifier,
    reset_link_classifier,
)
from linkstash.services.link_pipeline import (
    LinkPipeline,
    get_link_pipeline,
    reset_link_pipeline,
    validate_url,
)
from linkstash.services.vocabulary import VocabularySync, get_vocabulary_sync

__all__ = [
    # Classifier
    "LinkClassifier",
    "get_link_classifier",
    "reset_link_classifier",
    # Pipeline
    "LinkPipeline",
    "get_link_pipeline",
    "reset_link_pipeline",
    "validate_url",
    # Vocabulary
    "VocabularySync",
    "get_vocabulary_sync",
]
