"""
SDS Hazard Classification Core - Source Package

Main modules:
- normalization: Text cleanup, CAS handling, section location, similarity
- rules: Immutable classification tables (pictograms, PPE, H-code groups)
- extraction: Field extractors and the GHS Section 2 / Section 8 parsers
- conversion: GHS to HMIS rating conversion
- pipeline: Quality scoring, orchestration and batch classification
- matching: Document confidence matching for search disambiguation
- utils: Configuration management
"""

__version__ = "1.0.0"
__author__ = "Kiefer"
