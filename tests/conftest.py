"""Shared fixtures for gslda tests."""

import pytest

from gslda import MemoryForwardIndex


@pytest.fixture
def small_index():
    """Two documents over three terms: doc 0 = {w0: 2, w1: 1}, doc 1 = {w1: 1, w2: 2}."""
    return MemoryForwardIndex.from_ids_cnt([[0, 1], [1, 2]], [[2, 1], [1, 2]], n_voca=3)


@pytest.fixture
def disjoint_index():
    """Ten documents; the first five use terms 0-4 only, the last five terms 5-9 only."""
    postings = [[(w, 4) for w in range(5)] for _ in range(5)]
    postings += [[(w, 4) for w in range(5, 10)] for _ in range(5)]
    return MemoryForwardIndex(postings, n_voca=10)


@pytest.fixture
def check_invariants():
    """Return a function asserting the count-table invariants of a sampler."""

    def _check(model):
        index = model.index
        counts = model.counts
        n_tokens = sum(index.doc_size(d) for d in index.docs())

        for ti, terms in counts.topicTerm.items():
            assert sum(terms.values()) == counts.topicSum[ti]
            assert all(cnt > 0 for cnt in terms.values())
        assert set(counts.topicTerm) == set(counts.topicSum)
        assert all(cnt > 0 for cnt in counts.topicSum.values())
        assert sum(counts.topicSum.values()) == n_tokens

        for doc in index.docs():
            size = index.doc_size(doc)
            topics = counts.docTopic.get(doc, {})
            assert sum(topics.values()) == size
            assert all(cnt > 0 for cnt in topics.values())
            assignment = model.topic_assignment[doc]
            assert len(assignment) == size
            assert all(0 <= t < model.n_topic for t in assignment)

    return _check
