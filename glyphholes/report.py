# report.py
# map hole-count tallies onto output labels and render them

from __future__ import annotations
from typing import Dict, List, Mapping, Tuple

from .classify import Tallies
from .config import default_labels

DEFAULT_LABELS = default_labels(2)


def label_counts(tallies: Tallies, labels: Mapping[str, Mapping[int, int]] | None = None) -> List[Tuple[str, int]]:
    """
    Each label is a signed combination of buckets, e.g. {0: 1, 1: -1} is
    "0-hole shapes minus 1-hole shapes". Buckets beyond the tallies count 0.
    """
    labels = DEFAULT_LABELS if labels is None else labels
    out = []
    for name, combo in labels.items():
        n = sum(coef * (tallies[k] if 0 <= k < len(tallies) else 0) for k, coef in combo.items())
        out.append((name, n))
    return out


def format_report(tallies: Tallies, labels: Mapping[str, Mapping[int, int]] | None = None) -> str:
    return "\n".join(f"{name}: {n}" for name, n in label_counts(tallies, labels))


def report_dict(tallies: Tallies, labels: Mapping[str, Mapping[int, int]] | None = None) -> Dict:
    return {
        "tallies": {str(k): v for k, v in tallies.as_dict().items()},
        "labels": dict(label_counts(tallies, labels)),
    }
