"""Parsing, index naming, field profiles, query evaluation, and the in-memory store."""
from .parser import parse_text, tokenize_line
from .normalize import normalize_index_name
from .fields import extract_fields
from .query import classify_query, evaluate_query
from .store import IndexStore
from .export import export_csv, results_frame
from .loader import load_paths, load_inbox, UndecodableContentError
from .schemas import CsvIndex, FieldInfo, FieldValue, SearchResult
