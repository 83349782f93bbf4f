"""Tests for the in-memory forward index."""

import pytest

from gslda import ForwardIndex, IndexContractError, MemoryForwardIndex


def test_from_ids_cnt(small_index):
    assert isinstance(small_index, ForwardIndex)
    assert small_index.num_docs() == 2
    assert small_index.num_terms() == 3
    assert list(small_index.docs()) == [0, 1]
    assert list(small_index.postings(0)) == [(0, 2), (1, 1)]
    assert list(small_index.postings(1)) == [(1, 1), (2, 2)]
    assert small_index.doc_size(0) == 3
    assert small_index.doc_size(1) == 3


def test_postings_order_is_stable(small_index):
    assert list(small_index.postings(1)) == list(small_index.postings(1))


def test_from_token_lists_keeps_first_occurrence_order():
    index = MemoryForwardIndex.from_token_lists([[3, 1, 3, 0, 1, 3], [2]])
    assert index.num_terms() == 4
    assert list(index.postings(0)) == [(3, 3), (1, 2), (0, 1)]
    assert index.doc_size(0) == 6
    assert list(index.postings(1)) == [(2, 1)]


def test_vocabulary_size_can_exceed_used_terms():
    index = MemoryForwardIndex.from_token_lists([[0, 1]], n_voca=10)
    assert index.num_terms() == 10


def test_empty_document_has_size_zero():
    index = MemoryForwardIndex([[(0, 1)], []], n_voca=1)
    assert index.doc_size(1) == 0
    assert list(index.postings(1)) == []


@pytest.mark.parametrize("postings", [
    [[(0, 0)]],           # zero frequency
    [[(0, 1), (0, 2)]],   # duplicated term
    [[(5, 1)]],           # term outside vocabulary
    [[(-1, 1)]],
])
def test_invalid_postings_rejected(postings):
    with pytest.raises(IndexContractError):
        MemoryForwardIndex(postings, n_voca=3)


def test_mismatched_ids_and_counts_rejected():
    with pytest.raises(IndexContractError):
        MemoryForwardIndex.from_ids_cnt([[0, 1]], [[1]])
    with pytest.raises(IndexContractError):
        MemoryForwardIndex.from_ids_cnt([[0, 1]], [[1, 1], [2]])


def test_unknown_document(small_index):
    with pytest.raises(IndexContractError):
        small_index.doc_size(2)
    with pytest.raises(IndexContractError):
        small_index.postings(-1)
