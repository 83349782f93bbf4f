from abc import ABCMeta, abstractmethod
from collections import OrderedDict

import numpy as np

from .errors import IndexContractError
from .ids import DocId, TermId


class ForwardIndex(metaclass=ABCMeta):
    """ Read-only view of a corpus as per-document term frequencies

    The sampler relies on `postings` yielding the same pairs in the same order
    every time it is called for a given document.
    """

    @abstractmethod
    def docs(self):
        """ iterate over every document id exactly once """

    @abstractmethod
    def num_docs(self):
        """ number of documents D """

    @abstractmethod
    def num_terms(self):
        """ vocabulary size V """

    @abstractmethod
    def doc_size(self, doc):
        """ number of tokens in `doc`, i.e. the sum of its posting frequencies """

    @abstractmethod
    def postings(self, doc):
        """ iterate over the (term_id, frequency) pairs of `doc` """


class MemoryForwardIndex(ForwardIndex):
    """ Forward index held in memory

    Attributes
    ----------
    n_doc: int
        the number of documents
    n_voca: int
        the vocabulary size
    """

    def __init__(self, postings, n_voca):
        """

        Parameters
        ----------
        postings: list, size=n_doc
            for each document a list of (term_id, frequency) pairs
        n_voca: int
            vocabulary size; every term id must lie in [0, n_voca)
        """
        self.n_voca = int(n_voca)
        self._postings = list()
        self._sizes = list()

        for di, doc in enumerate(postings):
            pairs = list()
            seen = set()
            for word, cnt in doc:
                word, cnt = int(word), int(cnt)
                if word < 0 or word >= self.n_voca:
                    raise IndexContractError('document %d: term id %d outside vocabulary of size %d'
                                             % (di, word, self.n_voca))
                if cnt < 1:
                    raise IndexContractError('document %d: term %d has frequency %d' % (di, word, cnt))
                if word in seen:
                    raise IndexContractError('document %d: term %d appears twice' % (di, word))
                seen.add(word)
                pairs.append((TermId(word), cnt))
            self._postings.append(tuple(pairs))
            self._sizes.append(sum(cnt for _, cnt in pairs))

        self.n_doc = len(self._postings)

    @classmethod
    def from_ids_cnt(cls, doc_ids, doc_cnt, n_voca=None):
        """ Build an index from parallel lists of word ids and word counts per document

        Parameters
        ----------
        doc_ids: list
            list of arrays of word ids for each document
        doc_cnt: list
            list of arrays of word counts for each document
        n_voca: int
            vocabulary size, defaults to the largest word id + 1
        """
        if len(doc_ids) != len(doc_cnt):
            raise IndexContractError('doc_ids and doc_cnt have different lengths: %d != %d'
                                     % (len(doc_ids), len(doc_cnt)))
        postings = list()
        for di in range(len(doc_ids)):
            ids = np.asarray(doc_ids[di], dtype=int)
            cnt = np.asarray(doc_cnt[di], dtype=int)
            if ids.shape != cnt.shape:
                raise IndexContractError('document %d: %d ids but %d counts' % (di, ids.size, cnt.size))
            postings.append(list(zip(ids.tolist(), cnt.tolist())))
        if n_voca is None:
            n_voca = _max_term(postings) + 1
        return cls(postings, n_voca)

    @classmethod
    def from_token_lists(cls, docs, n_voca=None):
        """ Build an index from documents given as lists of word ids, one per token

        Postings follow the order in which each word first occurs in the document.
        """
        postings = list()
        for doc in docs:
            counter = OrderedDict()
            for word in doc:
                word = int(word)
                counter[word] = counter.get(word, 0) + 1
            postings.append(list(counter.items()))
        if n_voca is None:
            n_voca = _max_term(postings) + 1
        return cls(postings, n_voca)

    def docs(self):
        return (DocId(di) for di in range(self.n_doc))

    def num_docs(self):
        return self.n_doc

    def num_terms(self):
        return self.n_voca

    def doc_size(self, doc):
        try:
            return self._sizes[self._check_doc(doc)]
        except IndexError as err:
            raise IndexContractError('unknown document %r' % (doc,)) from err

    def postings(self, doc):
        try:
            return iter(self._postings[self._check_doc(doc)])
        except IndexError as err:
            raise IndexContractError('unknown document %r' % (doc,)) from err

    @staticmethod
    def _check_doc(doc):
        if doc < 0:
            raise IndexError(doc)
        return doc

    def __len__(self):
        return self.n_doc

    def __repr__(self):
        return '%s(n_doc=%d, n_voca=%d)' % (self.__class__.__name__, self.n_doc, self.n_voca)


def _max_term(postings):
    return max((word for doc in postings for word, _ in doc), default=-1)
