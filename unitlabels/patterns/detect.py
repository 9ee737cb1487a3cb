from __future__ import annotations

import re
from typing import Optional, Tuple

from unitlabels.patterns.catalog import CATALOG, DETECTION_ORDER
from unitlabels.patterns.schema import SchemeId

_CUSTOM_PARTS = re.compile(r"([A-Za-z]+)-(\d+)", re.ASCII)


def detect_pattern(label: Optional[str]) -> SchemeId:
    """
    Classify a label. Total: anything unrecognized (including empty input) is custom.
    """
    if not label:
        return SchemeId.CUSTOM
    for sid in DETECTION_ORDER:
        if CATALOG[sid].recognize(label):
            return sid
    return SchemeId.CUSTOM


def parse_custom_label(label: Optional[str]) -> Optional[Tuple[str, int]]:
    """
    Split "<letters>-<digits>" into (prefix, number); None for any other shape.
    """
    if not label:
        return None
    m = _CUSTOM_PARTS.fullmatch(label)
    if not m:
        return None
    return m.group(1), int(m.group(2))
