"""
PaperSnap backend - document vault with AI extraction.
"""
__version__ = "1.0.0"
