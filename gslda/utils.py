import numpy as np

from .formatted_logger import formatted_logger

logger = formatted_logger('GibbsLDA')


def sampling_from_dist(prob, rng):
    """ Sample index from a list of unnormalised probability distribution
        same as rng.choice(len(prob), p=prob/np.sum(prob))

    The returned index is the first one whose prefix sum strictly exceeds a
    uniform threshold in [0, prob.sum()). When the weights sum to zero (or are
    not finite) the draw falls back to uniform over all indices.

    Parameters
    ----------
    prob: ndarray
        array of unnormalised probability distribution
    rng: numpy.random.Generator
        source of the uniform variate

    Returns
    -------
    new_topic: return a sampled index
    """
    c_sum = np.cumsum(prob)
    total = c_sum[-1]
    if not np.isfinite(total) or total <= 0:
        logger.warning('degenerate weights (sum=%r), sampling uniformly over %d topics', total, len(prob))
        return int(rng.integers(len(prob)))

    thr = total * rng.random()
    new_topic = int(np.searchsorted(c_sum, thr, side='right'))
    # thr < total, but rounding in the cumulative sum may push past the last index
    return min(new_topic, len(prob) - 1)


def get_top_words(topic_word_matrix, vocab, topic, n_words=20):
    """ return the `n_words` most probable words of `topic`
    """
    if not isinstance(vocab, np.ndarray):
        vocab = np.array(vocab)
    top_words = vocab[topic_word_matrix[topic].argsort()[::-1][:n_words]]
    return top_words


def write_top_words(topic_word_matrix, vocab, filepath, n_words=20, delimiter=',', newline='\n'):
    """ write one line per topic: topic number followed by its top words
    """
    if not isinstance(vocab, np.ndarray):
        vocab = np.array(vocab)
    with open(filepath, 'w') as f:
        for ti in range(topic_word_matrix.shape[0]):
            top_words = vocab[topic_word_matrix[ti, :].argsort()[::-1][:n_words]]
            f.write('%d' % (ti))
            for word in top_words:
                f.write(delimiter + word)
            f.write(newline)
