from collections import Counter

import numpy as np
from nltk import word_tokenize
from nltk.corpus import stopwords, words

from .forward_index import MemoryForwardIndex


def get_ids_cnt(corpus, max_voca=9999999, remove_top_n=5, stop_words=None, valid_words=None):
    """ Turn a corpus into vocabulary, word ids and word counts

    Parameters
    ----------
    corpus: iterable
        documents, each a raw string (tokenized with nltk) or a list of tokens
    max_voca: int
        maximum number of vocabulary size for the returned corpus
    remove_top_n: int
        remove top n frequently used words
    stop_words: iterable
        words to drop; defaults to the nltk english stopword list
    valid_words: iterable
        if given, only these words are kept; pass None to use the nltk english word list,
        or an empty collection to keep every word

    Returns
    -------
    voca_list: ndarray
        list of vocabulary used to construct a corpus
    doc_ids: list
        list of arrays of word id for each document
    doc_cnt: list
        list of arrays of word count for each document
    """
    if stop_words is None:
        stop_words = stopwords.words('english')
    if valid_words is None:
        valid_words = words.words()
    stop = set(stop_words)
    voca = set(w.lower() for w in valid_words)

    docs = list()
    freq = Counter()

    for doc in corpus:
        if isinstance(doc, str):
            doc = word_tokenize(doc)
        elif not hasattr(doc, '__iter__'):
            raise TypeError('Corpus is not a list of string or token list')

        # remove word using stopword list or single character word
        doc = [word.lower() for word in doc
               if (not voca or word.lower() in voca) and word.lower() not in stop and len(word) != 1]
        freq.update(doc)
        docs.append(doc)

    voca = [key for rank, (key, val) in enumerate(freq.most_common(max_voca)) if rank >= remove_top_n]

    voca_dic = dict()
    voca_list = list()
    for word in voca:
        voca_dic[word] = len(voca_dic)
        voca_list.append(word)

    doc_ids = list()
    doc_cnt = list()

    for doc in docs:
        counter = Counter(word for word in doc if word in voca_dic)
        words_in_doc = sorted(counter, key=voca_dic.get)
        doc_ids.append(np.array([voca_dic[word] for word in words_in_doc], dtype=int))
        doc_cnt.append(np.array([counter[word] for word in words_in_doc], dtype=int))

    return np.array(voca_list), doc_ids, doc_cnt


def build_forward_index(corpus, max_voca=9999999, remove_top_n=5, stop_words=None, valid_words=None):
    """ Build a MemoryForwardIndex from raw documents

    Returns
    -------
    voca_list: ndarray
        vocabulary, indexed by term id
    index: MemoryForwardIndex
    """
    voca_list, doc_ids, doc_cnt = get_ids_cnt(corpus, max_voca, remove_top_n, stop_words, valid_words)
    return voca_list, MemoryForwardIndex.from_ids_cnt(doc_ids, doc_cnt, n_voca=len(voca_list))
