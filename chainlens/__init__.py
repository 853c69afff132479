"""Chainlens: multi-chain wallet lookups with a supervised language-model chat."""

__version__ = "1.0.0"
