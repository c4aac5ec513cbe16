from .documents import SUPPORTED_EXTENSIONS, DocumentError, extract_text, extract_text_from_path

__all__ = ["SUPPORTED_EXTENSIONS", "DocumentError", "extract_text", "extract_text_from_path"]
