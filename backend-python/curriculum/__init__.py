"""
Curriculum Topic Graph Module

Prerequisite resolution, eligibility checks, learning-path ordering and
progression validation over an immutable topic catalog snapshot.
"""

from curriculum.topic_catalog import TopicCatalog
from curriculum.graph_resolver import GraphResolver
from curriculum.eligibility_checker import EligibilityChecker
from curriculum.path_builder import PathBuilder
from curriculum.progression_validator import ProgressionValidator
from curriculum.catalog_provider import CatalogProvider, catalog_provider
from curriculum.topic_graph import TopicGraphService

__all__ = [
    "TopicCatalog",
    "GraphResolver",
    "EligibilityChecker",
    "PathBuilder",
    "ProgressionValidator",
    "CatalogProvider",
    "catalog_provider",
    "TopicGraphService"
]
