"""
Character-level feature extraction.
"""

from .vectorizer import CharVectorizer, encode_text, vectorize

__all__ = ['CharVectorizer', 'encode_text', 'vectorize']
