from .base import IndexerProvider, Provider, UpstreamDataError
from .tatum import TatumProvider

__all__ = ["Provider", "IndexerProvider", "UpstreamDataError", "TatumProvider"]
