"""Classifier package: LLM categorization with keyword-heuristic fallback."""

from linkstash.services.classifier.classifier import (
    LinkClassifier,
    get_link_classifier,
    parse_classification,
    reset_link_classifier,
)
from linkstash.services.classifier.heuristics import heuristic_category, heuristic_tags

__all__ = [
    "LinkClassifier",
    "get_link_classifier",
    "parse_classification",
    "reset_link_classifier",
    "heuristic_category",
    "heuristic_tags",
]
