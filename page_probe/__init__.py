from .datatypes import BagOfWords, SentenceDocument, Topic, SimilarityMatrix, SimilarityEdge, SentenceGraph, FailureKind, SummaryResult
from .config import LocatorConfig, SummaryConfig, ProbeSettings
from .tree import TreeNode, Selector, BLOCK_BREAK, parse_html, tag_selector, id_selector, class_selector, attribute_selector, role_selector
from .annotations import AnnotationCache
from .extractor import TextExtractor
from .locator import ContentLocator
from .preprocessing import split_sentences, split_words, remove_stopwords, to_bag_of_words
from .features import to_topics, to_vocabulary, cosine_similarity, get_similarity, find_similarity_matrix
from .scoring import score_similarity_matrix, normalize_score_list, find_similarity_scores
from .summarize import SentencesDocumentProcessor, summarize, generate_summary
from .graphing import build_graph, node_degrees, isolated_sentences
from .pipeline import extract_page_summary
