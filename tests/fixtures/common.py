"""Shared test fixtures for all test types."""

from typing import ClassVar

import pytest

from rankeval import (
    DiscountedCumulativeGainDetail,
    DocumentKey,
    EvaluationResult,
    MetricDetail,
    MetricDetailRegistry,
    PrecisionAtKDetail,
    ReciprocalRankDetail,
)


class CoverageDetail(MetricDetail):
    """Variant used by tests that need a tag outside the built-in set."""

    tag: ClassVar[str] = "coverage"

    covered: int
    label: str

    def write_payload(self, out):
        out.write_vint(self.covered)
        out.write_string(self.label)

    @classmethod
    def read_payload(cls, stream):
        return cls(
            covered=stream.read_vint("coverage.covered"),
            label=stream.read_string("coverage.label"),
        )


@pytest.fixture
def sample_key() -> DocumentKey:
    """The key used by the end-to-end example."""
    return DocumentKey(collection="idx", partition="t", document_id="d7")


@pytest.fixture
def sample_keys() -> list[DocumentKey]:
    """Keys in discovery order, including empty fields and non-ASCII text."""
    return [
        DocumentKey(collection="products", partition="_doc", document_id="42"),
        DocumentKey(collection="", partition="", document_id=""),
        DocumentKey(collection="articles", partition="news", document_id="übersicht-東京"),
    ]


@pytest.fixture
def sample_result(sample_key) -> EvaluationResult:
    """A result without metric details."""
    return EvaluationResult(id="req-1", quality_level=0.83, unknown_docs=[sample_key])


@pytest.fixture
def all_details() -> list[MetricDetail]:
    """One instance of every built-in variant."""
    return [
        PrecisionAtKDetail(k=10, relevant=6),
        ReciprocalRankDetail(first_relevant=3),
        ReciprocalRankDetail(first_relevant=-1),
        DiscountedCumulativeGainDetail(dcg=3.0, ideal_dcg=4.0, unrated_docs=2),
        DiscountedCumulativeGainDetail(dcg=1.5),
    ]


@pytest.fixture
def coverage_variant():
    """Register CoverageDetail for the duration of one test."""
    MetricDetailRegistry.register(CoverageDetail.tag, CoverageDetail)
    yield CoverageDetail
    MetricDetailRegistry.unregister(CoverageDetail.tag)
