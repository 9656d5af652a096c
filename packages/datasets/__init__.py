from .validator import validate_wordlists, pretty_summary
from .io import load_word_list, read_lines, unique_preserve_order

__all__ = ["validate_wordlists", "pretty_summary", "load_word_list", "unique_preserve_order"]
