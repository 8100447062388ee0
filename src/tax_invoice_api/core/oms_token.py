"""Order link tokens.

Order confirmation emails link customers to the tax invoice form with
``key``, ``oms`` (``"#<order>|<email>"``), ``ts`` and ``token`` query
parameters, where the token is the MD5 of ``"<oms>|<ts>|<key>"``.

Store themes are not consistent about the order of the three parts, about
URL-encoding, or about the leading ``#``, so verification accepts every
combination of those variants.
"""

import hashlib
from dataclasses import dataclass, field
from itertools import permutations
from typing import List, Tuple
from urllib.parse import quote, unquote

from tax_invoice_api.core.logger import setup_logger

logger = setup_logger(__name__)

# Characters a browser leaves unescaped in a URI component besides "_.-~"
URI_COMPONENT_SAFE = "!*'()"


class OmsFormatError(ValueError):
    """The ``oms`` parameter is not ``"<order>|<email>"``."""


@dataclass
class OmsVerification:
    """Result of checking an order link."""

    valid: bool
    order: str
    email: str
    key: str
    ts: str
    token: str
    candidates: List[str] = field(default_factory=list)
    digests: List[str] = field(default_factory=list)


def md5_hex(source: str) -> str:
    return hashlib.md5(source.encode("utf-8")).hexdigest()


def build_raw_oms(order: str, email: str) -> str:
    """Canonical ``oms`` value: ``"#<order>|<lowercased email>"``."""
    return f"#{order.strip().lstrip('#')}|{email.strip().lower()}"


def build_oms_token(order: str, email: str, ts: int, key: str) -> str:
    """Token for a freshly built order link."""
    return md5_hex(f"{build_raw_oms(order, email)}|{ts}|{key}")


def split_oms(oms: str) -> Tuple[str, str]:
    """Split a decoded ``oms`` value into (order name, lowercased email)."""
    parts = oms.split("|")
    if len(parts) != 2:
        raise OmsFormatError(f"Expected '<order>|<email>', got {len(parts)} part(s)")
    return parts[0], parts[1].strip().lower()


def _unique(values: List[str]) -> List[str]:
    return list(dict.fromkeys(values))


def token_candidates(key: str, oms: str, ts: str) -> List[str]:
    """Every token source string accepted for the given raw parameters."""
    key_dec, oms_dec, ts_dec = (unquote(v).strip() for v in (key, oms, ts))
    key_raw, oms_raw, ts_raw = key.strip(), oms.strip(), ts.strip()

    oms_no_hash = oms_dec[1:] if oms_dec.startswith("#") else oms_dec
    oms_raw_no_hash = oms_raw[3:] if oms_raw.startswith("%23") else oms_raw

    oms_variants = _unique([
        oms_dec,
        oms_no_hash,
        oms_raw,
        oms_raw_no_hash,
        quote(oms_dec, safe=URI_COMPONENT_SAFE),
        quote(oms_no_hash, safe=URI_COMPONENT_SAFE),
    ])
    ts_variants = _unique([ts_dec, ts_raw])
    key_variants = _unique([key_dec, key_raw])

    combos = []
    for o in oms_variants:
        for t in ts_variants:
            for k in key_variants:
                combos.extend("|".join(p) for p in permutations((o, t, k)))
    return _unique(combos)


def verify_oms_token(key: str, oms: str, ts: str, token: str) -> OmsVerification:
    """
    Check an order link token.

    Args:
        key, oms, ts: Query parameters as received
        token: Hex MD5 from the link (case-insensitive)

    Raises:
        OmsFormatError: If ``oms`` is not ``"<order>|<email>"``
    """
    oms_dec = unquote(oms)
    order_name, email = split_oms(oms_dec)
    token_dec = unquote(token).strip().lower()

    candidates = token_candidates(key, oms, ts)
    digests = [md5_hex(c) for c in candidates]
    valid = token_dec in digests

    if not valid:
        logger.warning(f"Order link token mismatch for order={order_name}")

    return OmsVerification(
        valid=valid,
        order=order_name.lstrip("#"),
        email=email,
        key=unquote(key),
        ts=unquote(ts),
        token=token_dec,
        candidates=candidates,
        digests=digests,
    )

