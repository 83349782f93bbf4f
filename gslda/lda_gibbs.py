import time
from enum import Enum
from types import MappingProxyType
from typing import Optional

import numpy as np
from scipy.special import gammaln

from .base import BaseGibbsParamTopicModel
from .errors import ConfigurationError, IndexContractError, InvariantError
from .formatted_logger import formatted_logger
from .ids import DocId, TermId, TopicId
from .utils import sampling_from_dist

logger = formatted_logger('GibbsLDA')

DEFAULT_CONVERGENCE = 1e-6


class SamplerStatus(Enum):
    FRESH = 'fresh'
    INITIALIZED = 'initialized'
    ITERATING = 'iterating'
    CONVERGED = 'converged'
    EXHAUSTED = 'exhausted'


class GibbsLDA(BaseGibbsParamTopicModel):
    """
    Latent dirichlet allocation,
    Blei, David M and Ng, Andrew Y and Jordan, Michael I, 2003

    Latent Dirichlet allocation with collapsed Gibbs sampling over a forward index.
    Each occurrence of a term in a document carries its own topic assignment;
    occurrences are numbered in posting order, so the index must return the
    postings of a document in the same order on every call.

    Attributes
    ----------
    index: ForwardIndex
        corpus being modelled, never modified by the sampler
    topic_assignment: dict
        doc_id -> int array of length doc_size(doc), topic of each word token
    token_terms: dict
        doc_id -> int array of length doc_size(doc), term of each word token as first read from the index
    status: SamplerStatus
        where the sampler is in its lifecycle
    log_likelihoods: list
        log-likelihood after initialization followed by one value per iteration
    n_iter: int
        number of completed iterations, initialization excluded
    rng: numpy.random.Generator
        random stream for every topic draw
    """

    def __init__(self, index, n_topic, alpha=0.1, beta=0.01, seed=None, **kwargs):
        super(GibbsLDA, self).__init__(n_doc=index.num_docs(), n_voca=index.num_terms(), n_topic=n_topic,
                                       alpha=alpha, beta=beta, **kwargs)
        self.index = index
        self.rng = np.random.default_rng(seed)

        self.topic_assignment = dict()
        self.token_terms = dict()
        self.status = SamplerStatus.FRESH
        self.log_likelihoods = list()
        self.n_iter = 0
        self._failed = False

    def run(self, max_iter=100, convergence=DEFAULT_CONVERGENCE):
        """ Gibbs sampling for LDA

        The first call initializes the topic assignments; later calls resume
        iterating from the current state.

        Parameters
        ----------
        max_iter: int
            maximum number of Gibbs sampling iteration
        convergence: float
            stop once the relative change of the log-likelihood is at most this value

        Returns
        -------
        status: SamplerStatus.CONVERGED or SamplerStatus.EXHAUSTED
        """
        if max_iter < 0:
            raise ConfigurationError('max_iter must be non-negative, got %d' % max_iter)
        if not convergence >= 0:
            raise ConfigurationError('convergence must be non-negative, got %r' % convergence)
        if self._failed:
            raise InvariantError('sampler failed during a previous run and must be discarded')

        try:
            return self._run(max_iter, convergence)
        except Exception:
            self._failed = True
            raise

    def _run(self, max_iter, convergence):
        if not self.log_likelihoods:
            prev = time.time()
            if self.status is SamplerStatus.FRESH:
                self.initialize()
            likelihood = self.corpus_likelihood()
            self.log_likelihoods.append(likelihood)
            if self.verbose:
                logger.info('[INIT] elapsed time:%.2f,\tlog_likelihood:%.2f', time.time() - prev, likelihood)
        else:
            likelihood = self.log_likelihoods[-1]

        for _ in range(max_iter):
            prev = time.time()
            self.status = SamplerStatus.ITERATING
            self.perform_iteration()
            self.n_iter += 1

            likelihood_update = self.corpus_likelihood()
            ratio = relative_change(likelihood, likelihood_update)
            likelihood = likelihood_update
            self.log_likelihoods.append(likelihood)

            if self.verbose:
                logger.info('[ITER] %d,\telapsed time:%.2f,\tlog_likelihood:%.2f', self.n_iter,
                            time.time() - prev, likelihood)
            if ratio <= convergence:
                logger.info('found convergence after %d iterations', self.n_iter)
                self.status = SamplerStatus.CONVERGED
                return self.status

        self.status = SamplerStatus.EXHAUSTED
        return self.status

    def initialize(self):
        """ assign a first topic to every word token, drawn from the counts accumulated so far
        """
        if self.status is not SamplerStatus.FRESH:
            raise InvariantError('sampler is already initialized (status %s)' % self.status.value)
        self._guarded_sweep(init=True)
        self.status = SamplerStatus.INITIALIZED

    def perform_iteration(self):
        """ resample the topic of every word token, in index order
        """
        if self.status is SamplerStatus.FRESH:
            raise InvariantError('perform_iteration called before initialize')
        self._guarded_sweep(init=False)

    def _guarded_sweep(self, init):
        if self._failed:
            raise InvariantError('sampler failed during a previous run and must be discarded')
        try:
            self._sweep(init)
        except Exception:
            self._failed = True
            raise

    def _sweep(self, init):
        visited = set()
        for doc in self.index.docs():
            if doc in visited:
                raise IndexContractError('document %d yielded twice by docs()' % doc)
            visited.add(doc)

            doc_size = self._doc_size(doc)
            if init:
                if not 0 <= doc < self.n_doc:
                    raise IndexContractError('document id %d outside [0, %d)' % (doc, self.n_doc))
                topics = np.zeros(doc_size, dtype=np.int64)
                terms = np.zeros(doc_size, dtype=np.int64)
                self.topic_assignment[doc] = topics
                self.token_terms[doc] = terms
            else:
                topics = self.topic_assignment.get(doc)
                if topics is None:
                    raise IndexContractError('document %d was not seen during initialization' % doc)
                if len(topics) != doc_size:
                    raise IndexContractError('doc_size of document %d changed from %d to %d'
                                             % (doc, len(topics), doc_size))
                terms = self.token_terms[doc]

            # token number within the document; each occurrence of a term gets its own slot
            wi = 0
            for word, cnt in self._postings(doc):
                if not 0 <= word < self.n_voca:
                    raise IndexContractError('document %d: term id %d outside [0, %d)' % (doc, word, self.n_voca))
                if wi + cnt > doc_size:
                    raise IndexContractError('postings of document %d exceed doc_size %d' % (doc, doc_size))
                if not init and (terms[wi:wi + cnt] != word).any():
                    raise IndexContractError('postings of document %d changed order: term %d at token %d'
                                             % (doc, word, wi))
                for _ in range(cnt):
                    if init:
                        terms[wi] = word
                    else:
                        old_topic = TopicId(int(topics[wi]))
                        self.counts.decrease(old_topic, word, doc)

                    new_topic = self.sample_topic(word, doc, doc_size)
                    topics[wi] = new_topic
                    self.counts.increase(new_topic, word, doc)
                    wi += 1

            if wi != doc_size:
                raise IndexContractError('postings of document %d hold %d tokens but doc_size is %d'
                                         % (doc, wi, doc_size))

        if len(visited) != len(self.topic_assignment):
            raise IndexContractError('docs() yielded %d documents, %d were initialized'
                                     % (len(visited), len(self.topic_assignment)))

    def sample_topic(self, word: TermId, doc: DocId, doc_size: Optional[int] = None) -> TopicId:
        """ draw a topic for one token of `word` in `doc` given every other assignment
        """
        prob = self.compute_probabilities(word, doc, doc_size)
        return TopicId(sampling_from_dist(prob, self.rng))

    def compute_probabilities(self, word: TermId, doc: DocId, doc_size: Optional[int] = None) -> np.ndarray:
        """ unnormalised conditional probability of each topic for a token of `word` in `doc`

        Returns
        -------
        prob: ndarray, shape (n_topic)
        """
        if doc_size is None:
            doc_size = self.count_doc(doc)
        counts = self.counts
        topics = range(self.n_topic)

        TW = np.fromiter((counts.count_term(word, ti) for ti in topics), dtype=float, count=self.n_topic)
        sum_T = np.fromiter((counts.count_topic(ti) for ti in topics), dtype=float, count=self.n_topic)
        DT = np.fromiter((counts.count_doc(doc, ti) for ti in topics), dtype=float, count=self.n_topic)

        return ((TW + self.beta) / (sum_T + self.n_voca * self.beta)) \
            * ((DT + self.alpha) / (doc_size + self.n_topic * self.alpha))

    def compute_probability(self, word: TermId, doc: DocId, topic: TopicId) -> float:
        return self.compute_term_topic_probability(word, topic) * self.compute_doc_topic_probability(doc, topic)

    def compute_term_topic_probability(self, word: TermId, topic: TopicId) -> float:
        return (self.count_term(word, topic) + self.beta) / (self.count_topic(topic) + self.n_voca * self.beta)

    def compute_doc_topic_probability(self, doc: DocId, topic: TopicId) -> float:
        return (self.count_doc(doc, topic) + self.alpha) / (self.count_doc(doc) + self.n_topic * self.alpha)

    def count_term(self, word: TermId, topic: TopicId) -> int:
        return self.counts.count_term(word, topic)

    def count_topic(self, topic: TopicId) -> int:
        return self.counts.count_topic(topic)

    def count_doc(self, doc: DocId, topic: Optional[TopicId] = None) -> int:
        """ number of tokens of `doc` assigned to `topic`, or the length of `doc` when no topic is given
        """
        if topic is None:
            return self._doc_size(doc)
        return self.counts.count_doc(doc, topic)

    def corpus_likelihood(self):
        """
        log-likelihood of the topic-term assignments, used to monitor convergence

        Summed over topics, then documents, then postings.
        """
        ll = self.n_topic * (gammaln(self.n_voca * self.beta) - self.n_voca * gammaln(self.beta))
        for ti in range(self.n_topic):
            topic = TopicId(ti)
            for doc in self.index.docs():
                for word, cnt in self._postings(doc):
                    ll += cnt * gammaln(self.counts.count_term(word, topic) + self.beta)
            ll -= gammaln(self.counts.count_topic(topic) + self.n_voca * self.beta)
        return float(ll)

    def topic_term_distribution(self):
        """ posterior estimate of phi

        Returns
        -------
        phi: ndarray, shape (n_topic, n_voca)
        """
        TW = np.zeros([self.n_topic, self.n_voca]) + self.beta
        sum_T = np.zeros(self.n_topic) + self.beta * self.n_voca
        for ti, terms in self.counts.topicTerm.items():
            for word, cnt in terms.items():
                TW[ti, word] += cnt
        for ti, cnt in self.counts.topicSum.items():
            sum_T[ti] += cnt
        return TW / sum_T[:, np.newaxis]

    def doc_topic_distribution(self):
        """ posterior estimate of theta

        Returns
        -------
        theta: ndarray, shape (n_doc, n_topic)
        """
        DT = np.zeros([self.n_doc, self.n_topic]) + self.alpha
        sum_D = np.zeros(self.n_doc) + self.alpha * self.n_topic
        for doc in self.index.docs():
            sum_D[doc] += self.count_doc(doc)
        for doc, topics in self.counts.docTopic.items():
            for ti, cnt in topics.items():
                DT[doc, ti] += cnt
        return DT / sum_D[:, np.newaxis]

    @property
    def topic_term_count(self):
        return self.counts.topic_term_view()

    @property
    def doc_topic_count(self):
        return self.counts.doc_topic_view()

    @property
    def topic_count(self):
        return self.counts.topic_view()

    @property
    def doc_word_topic(self):
        return MappingProxyType({doc: _read_only(topics) for doc, topics in self.topic_assignment.items()})

    def _doc_size(self, doc):
        try:
            return int(self.index.doc_size(DocId(doc)))
        except (KeyError, IndexError) as err:
            raise IndexContractError('document %r missing from the index' % (doc,)) from err

    def _postings(self, doc):
        try:
            return [(TermId(int(word)), int(cnt)) for word, cnt in self.index.postings(DocId(doc))]
        except (KeyError, IndexError) as err:
            raise IndexContractError('document %r missing from the index' % (doc,)) from err


def relative_change(prev, curr):
    """ |curr - prev| / |prev|, with 0/0 taken as no change
    """
    if prev == 0:
        return 0.0 if curr == 0 else np.inf
    return abs(curr - prev) / abs(prev)


def _read_only(array):
    view = array.view()
    view.flags.writeable = False
    return view
