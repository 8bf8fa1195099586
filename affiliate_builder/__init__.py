"""affiliate_builder — éditeur de blocs et générateur de sites affiliés Amazon."""
__version__ = "0.1.0"
