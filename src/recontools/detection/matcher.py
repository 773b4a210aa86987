"""Signature matcher: raw evidence for one signature against fetched content."""

from recontools.models.detection import EvidenceField, EvidenceItem, SignaturePattern
from recontools.models.fetch import FetchResult


def _header_contains(headers: dict[str, str], needle: str) -> bool:
    # Names are already lowercase at the fetch boundary
    return any(needle in name or needle in value.lower() for name, value in headers.items())


def match(content: FetchResult, signature: SignaturePattern) -> list[EvidenceItem]:
    """Return deduplicated evidence of ``signature`` in ``content``.

    ``html``, ``scripts`` and ``meta`` patterns are case-insensitive
    substrings of the body; ``headers`` patterns match a header name or
    value. Fields without patterns are skipped. No scoring happens here.
    """
    body = content.body.lower()
    evidence: dict[tuple[EvidenceField, str], EvidenceItem] = {}

    for field, patterns in signature.fields():
        for pattern in patterns:
            needle = pattern.lower()
            if field is EvidenceField.HEADER:
                found = _header_contains(content.headers, needle)
            else:
                found = needle in body

            if found and (field, pattern) not in evidence:
                evidence[(field, pattern)] = EvidenceItem(field=field, pattern=pattern)

    return list(evidence.values())
