"""
Text Extractor Module

Extracts plain text from uploaded PDF documents (PyMuPDF).
"""

from .schemas import Document, ExtractedText
from .extractor import TextExtractor

__all__ = [
    "TextExtractor",
    "Document",
    "ExtractedText",
]
