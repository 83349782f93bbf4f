from typing import NewType

# identifiers of the three index spaces; a term id is never a topic id
TermId = NewType('TermId', int)
DocId = NewType('DocId', int)
TopicId = NewType('TopicId', int)
