"""Parser for the flat, delimiter-separated text the Contacts scripts print.

osascript can only hand back a string, so the scripts flatten records with
multi-character separators that are unlikely to appear in contact data.
They are not escaped: a field containing a separator corrupts its record.
"""

from __future__ import annotations

from core.domain.contacts import LabeledValue

TOTAL_SEP = "~~~"
RECORD_SEP = ":::"
FIELD_SEP = "|||"
ITEM_SEP = ";;;"
LABEL_SEP = "="
ADDRESS_SEP = "|"

NULL_SENTINEL = "null"

_LABEL_PREFIX = "_$!<"
_LABEL_SUFFIX = ">!$_"


def split_records(
    text: str,
    record_sep: str = RECORD_SEP,
    field_sep: str = FIELD_SEP,
    *,
    min_fields: int = 1,
) -> list[list[str]]:
    """Split ``text`` into records of trimmed fields.

    Records with fewer than ``min_fields`` fields are dropped.
    """

    records: list[list[str]] = []
    if not text or not text.strip():
        return records
    for chunk in text.split(record_sep):
        if not chunk.strip():
            continue
        fields = [part.strip() for part in chunk.split(field_sep)]
        if len(fields) < min_fields:
            continue
        records.append(fields)
    return records


def clean_label(label: str) -> str:
    """``_$!<Home>!$_`` -> ``Home``; plain labels pass through."""

    label = label.strip()
    if label.startswith(_LABEL_PREFIX):
        label = label[len(_LABEL_PREFIX):]
    if label.endswith(_LABEL_SUFFIX):
        label = label[: -len(_LABEL_SUFFIX)]
    return label


def normalize_null(value: str) -> str:
    return "" if value == NULL_SENTINEL else value


def parse_labeled_values(text: str, item_sep: str = ITEM_SEP) -> list[LabeledValue]:
    out: list[LabeledValue] = []
    for item in text.split(item_sep):
        if not item.strip():
            continue
        label, sep, value = item.partition(LABEL_SEP)
        if not sep:
            continue
        out.append(LabeledValue(label=clean_label(label), value=value.strip()))
    return out


def split_total(text: str) -> tuple[int, str]:
    """Split ``"<total>~~~<body>"``; a missing or bad total reads as 0."""

    head, sep, body = text.partition(TOTAL_SEP)
    if not sep:
        return 0, text
    try:
        return int(head.strip()), body
    except ValueError:
        return 0, body
