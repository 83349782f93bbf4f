from .count_tables import CountTables
from .errors import ConfigurationError


class BaseTopicModel():
    """
    Attributes
    ----------
    n_doc: int
        the number of total documents in the corpus
    n_voca: int
        the vocabulary size of the corpus
    verbose: boolean
        if True, log each iteration step while inference.
    """
    def __init__(self, n_doc, n_voca, **kwargs):
        if n_doc < 1:
            raise ConfigurationError('number of documents must be at least 1, got %d' % n_doc)
        if n_voca < 1:
            raise ConfigurationError('vocabulary size must be at least 1, got %d' % n_voca)
        self.n_doc = n_doc
        self.n_voca = n_voca
        self.verbose = kwargs.pop('verbose', True)
        if kwargs:
            raise ConfigurationError('unexpected arguments: %s' % ', '.join(sorted(kwargs)))


class BaseGibbsParamTopicModel(BaseTopicModel):
    """ Base class of parametric topic models with Gibbs sampling inference

    Attributes
    ----------
    n_topic: int
        a number of topics to be inferred through the Gibbs sampling
    counts: CountTables
        sparse topic-term, document-topic and topic counts of assigned word tokens
    alpha: float
        symmetric parameter of Dirichlet prior for document-topic distribution
    beta: float
        symmetric parameter of Dirichlet prior for topic-word distribution
    """

    def __init__(self, n_doc, n_voca, n_topic, alpha, beta, **kwargs):
        super(BaseGibbsParamTopicModel, self).__init__(n_doc=n_doc, n_voca=n_voca, **kwargs)
        if n_topic < 1:
            raise ConfigurationError('number of topics must be at least 1, got %d' % n_topic)
        if not alpha > 0:
            raise ConfigurationError('alpha must be positive, got %r' % alpha)
        if not beta > 0:
            raise ConfigurationError('beta must be positive, got %r' % beta)
        self.n_topic = n_topic
        self.alpha = float(alpha)
        self.beta = float(beta)

        self.counts = CountTables()
