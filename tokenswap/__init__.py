"""Fill 0x swap quotes through a deployed SimpleTokenSwap contract."""

__version__ = "0.1.0"
