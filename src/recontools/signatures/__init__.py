"""Bundled signature corpora and loaders."""

from recontools.signatures.loader import (
    CMS_CATEGORY,
    get_cms_corpus,
    get_tech_corpus,
    load_corpus,
    load_corpus_file,
)

__all__ = [
    "CMS_CATEGORY",
    "get_cms_corpus",
    "get_tech_corpus",
    "load_corpus",
    "load_corpus_file",
]
