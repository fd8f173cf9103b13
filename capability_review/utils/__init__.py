from .logger import setup_logging
from .coercion import as_text, as_text_list

__all__ = ["setup_logging", "as_text", "as_text_list"]
