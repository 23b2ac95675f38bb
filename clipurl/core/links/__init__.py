"""URL detection for clipboard text"""

from .url import CandidateURL, parse_url, parse_url_strict, is_url

__all__ = ['CandidateURL', 'parse_url', 'parse_url_strict', 'is_url']
