"""Signature corpus loading and validation."""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Mapping

from pydantic import ValidationError as PydanticValidationError

from recontools.core.config import get_settings
from recontools.core.exceptions import ConfigError
from recontools.models.detection import SignatureCorpus, SignaturePattern
from recontools.signatures.cms import CMS_SIGNATURES
from recontools.signatures.tech import TECH_SIGNATURES

CMS_CATEGORY = "cms"


def load_corpus(data: Mapping[str, Mapping[str, Mapping[str, Any]]]) -> SignatureCorpus:
    """Build a corpus from ``{category: {name: {field: [patterns]}}}``.

    Signatures with no patterns in any field are rejected.

    Raises:
        ConfigError: the mapping is not a valid corpus
    """
    if not isinstance(data, Mapping):
        raise ConfigError("Signature corpus must map categories to signatures")
    categories: dict[str, dict[str, SignaturePattern]] = {}
    for category, signatures in data.items():
        if not isinstance(signatures, Mapping):
            raise ConfigError(f"Category '{category}' must map names to signatures")
        categories[category] = {}
        for name, fields in signatures.items():
            try:
                categories[category][name] = SignaturePattern(name=name, **fields)
            except (PydanticValidationError, TypeError) as e:
                raise ConfigError(
                    f"Invalid signature '{category}/{name}': {e}",
                    details={"category": category, "name": name},
                ) from e
    return SignatureCorpus(categories=categories)


def load_corpus_file(path: Path) -> dict[str, SignatureCorpus]:
    """Load ``{"cms": {...}, "tech": {...}}`` from a JSON file.

    A section missing from the file keeps the bundled corpus.
    """
    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Cannot read signatures file {path}: {e}") from e
    if not isinstance(raw, Mapping):
        raise ConfigError(f"Signatures file {path} must contain a JSON object")

    corpora = {"cms": load_corpus(CMS_SIGNATURES), "tech": load_corpus(TECH_SIGNATURES)}
    if "cms" in raw:
        corpora["cms"] = load_corpus({CMS_CATEGORY: raw["cms"]})
    if "tech" in raw:
        corpora["tech"] = load_corpus(raw["tech"])
    return corpora


@lru_cache
def _configured_corpora() -> dict[str, SignatureCorpus]:
    settings = get_settings()
    if settings.signatures_path:
        return load_corpus_file(settings.signatures_path)
    return {"cms": load_corpus(CMS_SIGNATURES), "tech": load_corpus(TECH_SIGNATURES)}


def get_cms_corpus() -> SignatureCorpus:
    """Shared read-only CMS corpus."""
    return _configured_corpora()["cms"]


def get_tech_corpus() -> SignatureCorpus:
    """Shared read-only technology corpus."""
    return _configured_corpora()["tech"]
