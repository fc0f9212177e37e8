"""
Pytest configuration and shared fixtures for SDS classification tests.

Provides:
- Normalizers and CAS extractors
- Rule tables, section parsers and the HMIS converter
- A default-configured classifier and classified sample records
- Candidate documents and a matcher for confidence scoring
"""

import pytest
from pathlib import Path

import yaml

from sds_hazard.conversion.hmis_converter import GHSToHMISConverter
from sds_hazard.extraction.section2_parser import GHSSection2Parser
from sds_hazard.extraction.section8_parser import Section8Parser
from sds_hazard.matching.confidence_matcher import DocumentConfidenceMatcher
from sds_hazard.matching.types import CandidateDocument
from sds_hazard.normalization.cas_extractor import CASExtractor
from sds_hazard.normalization.text_normalizer import TextNormalizer
from sds_hazard.pipeline.orchestrator import SDSClassifier
from sds_hazard.rules import DEFAULT_RULES
from sds_hazard.utils.config_manager import ConfigManager
from tests.fixtures.test_data import (
    ACETONE_CANDIDATE,
    ACETONE_SDS,
    FORMALIN_SDS,
    NAIL_POLISH_CANDIDATE,
)


# ============================================================================
# NORMALIZATION FIXTURES
# ============================================================================

@pytest.fixture(scope="session")
def text_normalizer():
    """Provide a TextNormalizer instance."""
    return TextNormalizer()


@pytest.fixture(scope="session")
def cas_extractor():
    """Provide a CASExtractor instance."""
    return CASExtractor()


# ============================================================================
# RULES / PARSER FIXTURES
# ============================================================================

@pytest.fixture(scope="session")
def rules():
    """Default immutable rule tables."""
    return DEFAULT_RULES


@pytest.fixture
def section2_parser(rules):
    return GHSSection2Parser(rules=rules)


@pytest.fixture
def section8_parser(rules):
    return Section8Parser(rules=rules)


@pytest.fixture
def converter(rules):
    return GHSToHMISConverter(rules=rules)


# ============================================================================
# PIPELINE FIXTURES
# ============================================================================

@pytest.fixture
def default_config():
    """ConfigManager holding built-in defaults only (no file read)."""
    return ConfigManager()


@pytest.fixture
def classifier(default_config):
    """Provide an SDSClassifier with default configuration."""
    return SDSClassifier(config=default_config)


@pytest.fixture(scope="module")
def acetone_result():
    """Classification result of the complete acetone SDS (computed once per module)."""
    return SDSClassifier(config=ConfigManager()).classify(ACETONE_SDS)


@pytest.fixture(scope="module")
def formalin_result():
    return SDSClassifier(config=ConfigManager()).classify(FORMALIN_SDS)


# ============================================================================
# CONFIG FILE FIXTURES
# ============================================================================

@pytest.fixture
def write_config(tmp_path):
    """
    Factory writing a YAML config file into a temp directory.

    Usage:
        path = write_config({'thresholds': {'auto_select': 0.8}})
    """
    def _write(data, name: str = 'classifier_config.yaml') -> Path:
        path = tmp_path / name
        with open(path, 'w', encoding='utf-8') as f:
            yaml.safe_dump(data, f)
        return path

    return _write


# ============================================================================
# MATCHING FIXTURES
# ============================================================================

@pytest.fixture
def acetone_candidate():
    return CandidateDocument(**ACETONE_CANDIDATE)


@pytest.fixture
def nail_polish_candidate():
    return CandidateDocument(**NAIL_POLISH_CANDIDATE)


@pytest.fixture
def candidates(acetone_candidate, nail_polish_candidate):
    """Candidates in deliberately worst-first order."""
    return [nail_polish_candidate, acetone_candidate]


@pytest.fixture
def matcher(default_config):
    """Provide a DocumentConfidenceMatcher with default weights and thresholds."""
    return DocumentConfidenceMatcher(config=default_config)
