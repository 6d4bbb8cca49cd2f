#!/usr/bin/env python3
"""
RankEval Demo Application

Builds one evaluation result, sends it through the binary encoding, and
prints its rendered form.
"""

import sys

from loguru import logger

from rankeval import (
    DecodeError,
    DocumentKey,
    EvaluationResult,
    PrecisionAtKDetail,
)
from rankeval.observability import configure_logging


def main() -> int:
    configure_logging()

    result = EvaluationResult(
        id="req-1",
        quality_level=0.6,
        unknown_docs=[
            DocumentKey(collection="products", partition="_doc", document_id="17"),
            DocumentKey(collection="products", partition="_doc", document_id="4"),
        ],
    )
    result.attach_detail(PrecisionAtKDetail(k=10, relevant=6))

    payload = result.to_bytes()
    logger.info(f"Encoded result '{result.id}' into {len(payload)} bytes")

    try:
        decoded = EvaluationResult.from_bytes(payload)
    except DecodeError as e:
        logger.error(f"Decode failed: {e}")
        return 1

    if decoded != result:
        logger.error("Decoded result differs from the original")
        return 1

    print(decoded.to_json(indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
