from __future__ import annotations


class TokenizerError(Exception):
    pass


class ConfigurationError(TokenizerError, ValueError):
    """
    bad dictionary id, option or pattern table; raised at construction only
    """


class AnalysisFailure(TokenizerError, RuntimeError):
    """
    morphological analysis failed for one document; the whole document is aborted
    """
