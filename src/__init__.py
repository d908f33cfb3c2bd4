"""
Grounded Assistants - Source Package
====================================

Price index and industrial activity assistants that answer only from
registered reference documents, with period-based freshness tagging.
"""

__version__ = "1.0.0"
