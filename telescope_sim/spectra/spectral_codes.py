"""
Spectral type <-> numeric code.

Code layout: C SS LLL 00 with
    C   = class index (O=1, B=2, A=3, F=4, G=5, K=6, M=7)
    SS  = subtype digit, zero padded
    LLL = luminosity class x 1000 (V=5, III=3, I=1)
e.g. "G5 V" -> 50505000
"""

from __future__ import annotations
from typing import Dict, Optional

CLASS_INDEX = {'O': 1, 'B': 2, 'A': 3, 'F': 4, 'G': 5, 'K': 6, 'M': 7}
LUMINOSITY_INDEX = {'V': 5, 'III': 3, 'I': 1}

# Subtypes present in the atlas, per (class, luminosity)
_ATLAS_SUBTYPES = {
    ('O', 'V'):   (3, 4, 5, 6, 7, 8),
    ('O', 'III'): (3, 4, 7, 8),
    ('B', 'V'):   (0, 1, 2, 3, 4, 5, 6, 7, 8, 9),
    ('B', 'III'): (0, 1, 2, 3, 4, 5, 6, 7, 8),
    ('B', 'I'):   (1, 4, 5, 8),
    ('A', 'V'):   (0, 1, 2, 3, 4, 5, 6, 7, 8, 9),
    ('A', 'III'): (0, 1, 2, 3, 4, 5, 6, 7, 8),
    ('A', 'I'):   (1, 2, 3),
    ('F', 'V'):   (0, 1, 2, 3, 4, 5, 6, 7, 8),
    ('F', 'III'): (0, 1, 2, 3, 4, 5, 6, 7, 8),
    ('F', 'I'):   (1, 4, 7),
    ('G', 'V'):   (0, 1, 2, 3, 4, 5, 6, 7, 8),
    ('G', 'III'): (0, 1, 2, 3, 4, 5, 6, 7, 8),
    ('G', 'I'):   (0, 1, 2, 3, 4, 5, 6, 7),
    ('K', 'V'):   (0, 1, 2, 3, 4, 5, 6, 7, 8),
    ('K', 'III'): (0, 1, 2, 3, 4, 5, 6, 7, 8),
    ('K', 'I'):   (0, 1, 2, 3, 4, 7, 8),
    ('M', 'V'):   (0, 1, 2, 3, 4),
    ('M', 'III'): (0, 1, 2, 3, 4),
    ('M', 'I'):   (0, 1, 2, 3, 4),
}


def encode_spectral_type(letter: str, subtype: int, luminosity: str) -> int:
    return (CLASS_INDEX[letter] * 10_000_000
            + subtype * 100_000
            + LUMINOSITY_INDEX[luminosity] * 1000)


def _build_table() -> Dict[str, int]:
    table = {}
    for (letter, lum), subtypes in _ATLAS_SUBTYPES.items():
        for s in subtypes:
            table[f"{letter}{s} {lum}"] = encode_spectral_type(letter, s, lum)
    return table


SPECTRAL_CODES: Dict[str, int] = _build_table()
_TYPES_BY_CODE = {code: label for label, code in SPECTRAL_CODES.items()}


def spectral_code_for(spec_type: str) -> Optional[int]:
    """Code of an atlas spectral type such as "K3 III", or None."""
    return SPECTRAL_CODES.get(" ".join(spec_type.split()).upper())


def spectral_type_for(code: int) -> Optional[str]:
    return _TYPES_BY_CODE.get(code)
