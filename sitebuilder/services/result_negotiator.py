# FILE: sitebuilder/services/result_negotiator.py
"""
Decides whether the model answered with bare markup or with the structured
{html, hasBackend, backendCode, databaseSchema, edgeFunctions} payload.

The model is only *asked* for JSON when a backend is requested; it may ignore
that. Anything that is not a usable JSON object degrades to markup-only with
the raw text untouched. Negotiation never raises.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple, Union

from sitebuilder.services.generation_types import EdgeFunction, GenerationResult

logger = logging.getLogger("sitebuilder.negotiator")


@dataclass(frozen=True)
class Structured:
    payload: Dict[str, Any]
    html: str


@dataclass(frozen=True)
class Fallback:
    reason: str


ParseOutcome = Union[Structured, Fallback]


def parse_structured(raw_text: str) -> ParseOutcome:
    """Tagged parse step: Structured when raw_text is a JSON object with a non-empty html string."""
    try:
        payload = json.loads(raw_text)
    except (TypeError, ValueError):
        return Fallback("not valid JSON")

    if not isinstance(payload, dict):
        return Fallback("JSON root is not an object")

    html = payload.get("html")
    if not isinstance(html, str) or not html:
        return Fallback("missing or empty 'html' field")

    return Structured(payload=payload, html=html)


def _edge_functions(value: Any) -> Optional[Tuple[EdgeFunction, ...]]:
    if value is None:
        return None
    if not isinstance(value, list):
        return None
    return tuple(
        EdgeFunction(name=str(item.get("name", "")), description=str(item.get("description", "")))
        for item in value
        if isinstance(item, dict)
    )


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    return value if isinstance(value, str) else json.dumps(value)


def negotiate(raw_text: str, include_backend: bool) -> GenerationResult:
    if not include_backend:
        return GenerationResult(markup=raw_text, has_backend=False)

    outcome = parse_structured(raw_text)

    if isinstance(outcome, Fallback):
        logger.info("Structured response unusable (%s), treating it as markup", outcome.reason)
        return GenerationResult(markup=raw_text, has_backend=False)

    data = outcome.payload
    has_backend = data.get("hasBackend")
    return GenerationResult(
        markup=outcome.html,
        has_backend=bool(has_backend) if has_backend is not None else False,
        backend_code=_optional_text(data.get("backendCode")),
        database_schema=_optional_text(data.get("databaseSchema")),
        edge_functions=_edge_functions(data.get("edgeFunctions")),
    )
