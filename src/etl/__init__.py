"""Catalog loading: CSV extraction and row normalization."""

from src.etl.extractors import CatalogExtractor, CatalogNormalizer, LoadStats

__all__ = ["CatalogExtractor", "CatalogNormalizer", "LoadStats"]
