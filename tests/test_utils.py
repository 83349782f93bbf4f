"""Tests for topic sampling and top-word output."""

import logging

import numpy as np
import pytest

from gslda.utils import get_top_words, sampling_from_dist, write_top_words


def test_single_nonzero_weight_always_drawn():
    rng = np.random.default_rng(0)
    for _ in range(100):
        assert sampling_from_dist(np.array([0., 2., 0.]), rng) == 1
        assert sampling_from_dist(np.array([1., 0., 0., 0.]), rng) == 0
        assert sampling_from_dist(np.array([0., 0., 0., 3.]), rng) == 3


def test_draw_frequencies_follow_weights():
    rng = np.random.default_rng(1)
    draws = np.array([sampling_from_dist(np.array([1., 3.]), rng) for _ in range(20000)])
    assert draws.mean() == pytest.approx(0.75, abs=0.02)


def test_single_topic():
    rng = np.random.default_rng(2)
    assert sampling_from_dist(np.array([0.3]), rng) == 0


def test_zero_weights_fall_back_to_uniform(caplog):
    rng = np.random.default_rng(3)
    with caplog.at_level(logging.WARNING):
        draws = [sampling_from_dist(np.zeros(4), rng) for _ in range(400)]
    assert set(draws) == {0, 1, 2, 3}
    assert 'degenerate weights' in caplog.text
    assert {record.name for record in caplog.records} == {'GibbsLDA'}


def test_same_seed_same_draws():
    prob = np.array([0.2, 0.5, 0.3])
    first = [sampling_from_dist(prob, np.random.default_rng(9)) for _ in range(10)]
    second = [sampling_from_dist(prob, np.random.default_rng(9)) for _ in range(10)]
    assert first == second


def test_top_words():
    phi = np.array([[0.1, 0.7, 0.2], [0.5, 0.1, 0.4]])
    vocab = ['apple', 'banana', 'cherry']
    assert list(get_top_words(phi, vocab, 0, n_words=2)) == ['banana', 'cherry']
    assert list(get_top_words(phi, vocab, 1, n_words=3)) == ['apple', 'cherry', 'banana']


def test_write_top_words(tmp_path):
    phi = np.array([[0.1, 0.7, 0.2], [0.5, 0.1, 0.4]])
    path = tmp_path / 'topics.txt'
    write_top_words(phi, ['apple', 'banana', 'cherry'], str(path), n_words=2)
    assert path.read_text() == '0,banana,cherry\n1,apple,cherry\n'
