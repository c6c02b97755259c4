"""ETL extractors package.

Classes:
    CatalogExtractor: Netflix catalog CSV extractor.
    CatalogNormalizer: Raw row to SourceRow normalizer.
"""

from src.etl.extractors.csv import CatalogExtractor, CatalogNormalizer, LoadStats

__all__ = ["CatalogExtractor", "CatalogNormalizer", "LoadStats"]
