from .source_adapter import SourceAdapterPort
from .source_provider import SourceProviderPort

__all__ = [
    "SourceAdapterPort",
    "SourceProviderPort",
]
