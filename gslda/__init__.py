from .lda_gibbs import GibbsLDA, SamplerStatus, DEFAULT_CONVERGENCE
from .forward_index import ForwardIndex, MemoryForwardIndex
from .count_tables import CountTables
from .errors import LDAError, ConfigurationError, IndexContractError, InvariantError
from .ids import TermId, DocId, TopicId
