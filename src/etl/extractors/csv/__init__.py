"""CSV extractors package.

Provides the Netflix catalog CSV extractor and its row normalizer.
"""

from src.etl.extractors.csv.extractor import CatalogExtractor, LoadStats
from src.etl.extractors.csv.normalizer import CatalogNormalizer

__all__ = ["CatalogExtractor", "CatalogNormalizer", "LoadStats"]
