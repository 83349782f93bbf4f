from types import MappingProxyType

from .errors import InvariantError
from .ids import DocId, TermId, TopicId


class CountTables:
    """ Sparse sufficient statistics of a collapsed Gibbs sampler

    Only nonzero counts are stored; a count that drops to zero is deleted,
    and so is an inner table that becomes empty.

    Attributes
    ----------
    topicTerm: dict
        topic -> {term -> number of tokens of term assigned to topic}
    docTopic: dict
        doc -> {topic -> number of tokens of doc assigned to topic}
    topicSum: dict
        topic -> number of tokens assigned to topic over the corpus
    """

    def __init__(self):
        self.topicTerm = dict()
        self.docTopic = dict()
        self.topicSum = dict()

    def increase(self, topicNo: TopicId, termNo: TermId, docNo: DocId) -> None:
        """ assign one more token of `termNo` in `docNo` to `topicNo`
        """
        terms = self.topicTerm.setdefault(topicNo, dict())
        terms[termNo] = terms.get(termNo, 0) + 1

        topics = self.docTopic.setdefault(docNo, dict())
        topics[topicNo] = topics.get(topicNo, 0) + 1

        self.topicSum[topicNo] = self.topicSum.get(topicNo, 0) + 1

    def decrease(self, topicNo: TopicId, termNo: TermId, docNo: DocId) -> None:
        """ remove one token of `termNo` in `docNo` from `topicNo`
        """
        if (self.count_term(termNo, topicNo) < 1 or self.count_doc(docNo, topicNo) < 1
                or self.count_topic(topicNo) < 1):
            raise InvariantError('cannot decrease absent count: topic=%d term=%d doc=%d'
                                 % (topicNo, termNo, docNo))

        terms = self.topicTerm[topicNo]
        if terms[termNo] == 1:
            del terms[termNo]
            if not terms:
                del self.topicTerm[topicNo]
        else:
            terms[termNo] -= 1

        topics = self.docTopic[docNo]
        if topics[topicNo] == 1:
            del topics[topicNo]
            if not topics:
                del self.docTopic[docNo]
        else:
            topics[topicNo] -= 1

        if self.topicSum[topicNo] == 1:
            del self.topicSum[topicNo]
        else:
            self.topicSum[topicNo] -= 1

    def count_term(self, termNo: TermId, topicNo: TopicId) -> int:
        terms = self.topicTerm.get(topicNo)
        if terms is None:
            return 0
        return terms.get(termNo, 0)

    def count_topic(self, topicNo: TopicId) -> int:
        return self.topicSum.get(topicNo, 0)

    def count_doc(self, docNo: DocId, topicNo: TopicId) -> int:
        topics = self.docTopic.get(docNo)
        if topics is None:
            return 0
        return topics.get(topicNo, 0)

    def total(self) -> int:
        """ return the number of tokens currently assigned to any topic
        """
        return sum(self.topicSum.values())

    def topic_term_view(self):
        return _nested_view(self.topicTerm)

    def doc_topic_view(self):
        return _nested_view(self.docTopic)

    def topic_view(self):
        return MappingProxyType(self.topicSum)


def _nested_view(table):
    return MappingProxyType({key: MappingProxyType(inner) for key, inner in table.items()})
