"""scriba: real-time speech dictation that types what you say."""

__version__ = '0.3.0'
