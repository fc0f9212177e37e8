"""
Type definitions for SDS extraction.

Defines the value objects produced by the field extractors, the GHS
Section 2 and Section 8 parsers, the HMIS converter and the pipeline
orchestrator. Every type serializes with ``to_dict()`` into plain,
deterministically ordered, JSON-compatible structures.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from sds_hazard.rules import HMIS_PPE_CODES

STATEMENT_CODE_PATTERN = re.compile(r'[HP]\d{3}(?:\+[HP]\d{3})*')
HAZARD_CLASS_CODE_PATTERN = re.compile(r'H\d{3}')
PICTOGRAM_CODE_PATTERN = re.compile(r'GHS0[1-9]')
SIGNAL_WORDS = frozenset({'DANGER', 'WARNING'})


def _validate_rating(name: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 4:
        raise ValueError(f"{name} rating must be an integer 0-4, got {value!r}")


@dataclass(frozen=True)
class HazardStatement:
    """
    A hazard (H) or precautionary (P) statement.

    Attributes:
        code: Statement code, e.g. 'H225', 'P210' or a combination 'H302+H312'
        description: Statement text following the code
    """
    code: str
    description: str

    def __post_init__(self):
        if not STATEMENT_CODE_PATTERN.fullmatch(self.code):
            raise ValueError(f"Invalid statement code '{self.code}'")

    @property
    def codes(self) -> List[str]:
        """Individual codes of a combined statement."""
        return self.code.split('+')

    def to_dict(self) -> Dict[str, Any]:
        return {'code': self.code, 'description': self.description}


@dataclass(frozen=True)
class HazardClass:
    """
    A classified hazard found in GHS Section 2.

    Attributes:
        code: Hazard code, 'H' followed by three digits
        category: GHS category (1 is the most severe)
        description: Hazard statement text
        section: SDS section the class was read from
    """
    code: str
    category: int
    description: str
    section: str = '2'

    def __post_init__(self):
        if not HAZARD_CLASS_CODE_PATTERN.fullmatch(self.code):
            raise ValueError(f"Invalid hazard class code '{self.code}'")
        if self.category < 1:
            raise ValueError(f"Hazard category must be >= 1, got {self.category}")

    @property
    def number(self) -> int:
        """Numeric part of the code (225 for H225)."""
        return int(self.code[1:])

    def to_dict(self) -> Dict[str, Any]:
        return {
            'code': self.code,
            'category': self.category,
            'description': self.description,
            'section': self.section,
        }


@dataclass
class PhysicalProperties:
    """Temperatures read from the document, always in Fahrenheit."""
    flash_point_f: Optional[float] = None
    boiling_point_f: Optional[float] = None
    melting_point_f: Optional[float] = None
    auto_ignition_temp_f: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'flash_point_f': self.flash_point_f,
            'boiling_point_f': self.boiling_point_f,
            'melting_point_f': self.melting_point_f,
            'auto_ignition_temp_f': self.auto_ignition_temp_f,
        }


@dataclass
class ToxicityData:
    """
    Acute toxicity values.

    LD50 values are stored in mg/kg body weight. The inhalation LC50 is
    stored in mg/L unless the document reports ppm, in which case ``unit``
    is 'ppm' and the value is kept as reported.
    """
    ld50_oral_mg_kg: Optional[float] = None
    ld50_dermal_mg_kg: Optional[float] = None
    lc50_inhalation_mg_l: Optional[float] = None
    unit: Optional[str] = None
    species: Optional[str] = None

    @property
    def has_data(self) -> bool:
        return any(v is not None for v in (
            self.ld50_oral_mg_kg, self.ld50_dermal_mg_kg, self.lc50_inhalation_mg_l))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'ld50_oral_mg_kg': self.ld50_oral_mg_kg,
            'ld50_dermal_mg_kg': self.ld50_dermal_mg_kg,
            'lc50_inhalation_mg_l': self.lc50_inhalation_mg_l,
            'unit': self.unit,
            'species': self.species,
        }


@dataclass
class GHSSection2Data:
    """
    Structured content of GHS Section 2 (Hazard Identification).

    Attributes:
        hazard_classes: Hazard classes in order of appearance, one per code
        physical_properties: Temperatures converted to Fahrenheit
        toxicity_data: Acute toxicity values
        chronic_hazards: Chronic hazard keywords found (ordered, unique)
        is_carcinogenic: Carcinogenicity keyword or H350/H351 present
        is_mutagenic: Mutagenicity keyword or H340/H341 present
        has_reproductive_toxicity: Reproductive keyword or H360/H361 present
        has_respiratory_toxicity: Respiratory keyword or H334/H372 present
        has_skin_sensitizer: Skin sensitization keyword or H317 present
        pictogram_codes: GHS## tokens seen in the section window
        section_found: False when the section heading was missing and the
            start of the document was parsed instead
    """
    hazard_classes: List[HazardClass] = field(default_factory=list)
    physical_properties: PhysicalProperties = field(default_factory=PhysicalProperties)
    toxicity_data: ToxicityData = field(default_factory=ToxicityData)
    chronic_hazards: List[str] = field(default_factory=list)
    is_carcinogenic: bool = False
    is_mutagenic: bool = False
    has_reproductive_toxicity: bool = False
    has_respiratory_toxicity: bool = False
    has_skin_sensitizer: bool = False
    pictogram_codes: List[str] = field(default_factory=list)
    section_found: bool = True

    @property
    def hazard_codes(self) -> List[str]:
        return [hc.code for hc in self.hazard_classes]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'hazard_classes': [hc.to_dict() for hc in self.hazard_classes],
            'physical_properties': self.physical_properties.to_dict(),
            'toxicity_data': self.toxicity_data.to_dict(),
            'chronic_hazards': list(self.chronic_hazards),
            'is_carcinogenic': self.is_carcinogenic,
            'is_mutagenic': self.is_mutagenic,
            'has_reproductive_toxicity': self.has_reproductive_toxicity,
            'has_respiratory_toxicity': self.has_respiratory_toxicity,
            'has_skin_sensitizer': self.has_skin_sensitizer,
            'pictogram_codes': list(self.pictogram_codes),
            'section_found': self.section_found,
        }


@dataclass
class HMISCodes:
    """
    HMIS (Hazardous Materials Identification System) label ratings.

    Attributes:
        health: Health rating 0-4
        flammability: Flammability rating 0-4
        physical: Physical hazard rating 0-4
        ppe: PPE letter A-K, or X ("ask your supervisor")
        has_chronic_hazard: Chronic health effects present (the asterisk)
        confidence: How much source data backed the ratings, 0-100
        calculation_details: Ordered justification for every rating
    """
    health: int = 0
    flammability: int = 0
    physical: int = 0
    ppe: str = 'X'
    has_chronic_hazard: bool = False
    confidence: int = 0
    calculation_details: List[str] = field(default_factory=list)

    def __post_init__(self):
        _validate_rating('Health', self.health)
        _validate_rating('Flammability', self.flammability)
        _validate_rating('Physical', self.physical)
        if self.ppe not in HMIS_PPE_CODES:
            raise ValueError(f"Invalid PPE code '{self.ppe}'")
        if not 0 <= self.confidence <= 100:
            raise ValueError(f"Confidence must be between 0 and 100, got {self.confidence}")

    @property
    def label(self) -> str:
        """Compact label form, e.g. '2*/3/0/B'."""
        chronic = '*' if self.has_chronic_hazard else ''
        return f"{self.health}{chronic}/{self.flammability}/{self.physical}/{self.ppe}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            'health': self.health,
            'flammability': self.flammability,
            'physical': self.physical,
            'ppe': self.ppe,
            'has_chronic_hazard': self.has_chronic_hazard,
            'confidence': self.confidence,
            'calculation_details': list(self.calculation_details),
        }


@dataclass(frozen=True)
class Pictogram:
    """A GHS pictogram with its canonical name."""
    ghs_code: str
    name: str
    description: str = ''

    def __post_init__(self):
        if not PICTOGRAM_CODE_PATTERN.fullmatch(self.ghs_code):
            raise ValueError(f"Invalid pictogram code '{self.ghs_code}'")

    def to_dict(self) -> Dict[str, Any]:
        return {'ghs_code': self.ghs_code, 'name': self.name, 'description': self.description}


@dataclass
class PPERequirements:
    """Protective equipment read from SDS Section 8."""
    eye_protection: List[str] = field(default_factory=list)
    hand_protection: List[str] = field(default_factory=list)
    respiratory_protection: List[str] = field(default_factory=list)
    skin_protection: List[str] = field(default_factory=list)
    general_ppe: List[str] = field(default_factory=list)
    hmis_ppe_code: str = 'X'
    section_found: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            'eye_protection': list(self.eye_protection),
            'hand_protection': list(self.hand_protection),
            'respiratory_protection': list(self.respiratory_protection),
            'skin_protection': list(self.skin_protection),
            'general_ppe': list(self.general_ppe),
            'hmis_ppe_code': self.hmis_ppe_code,
            'section_found': self.section_found,
        }


@dataclass
class SDSClassificationRecord:
    """
    Complete hazard classification of one SDS document.

    ``hmis_codes`` holds the ratings computed from GHS data;
    ``extracted_hmis`` and ``nfpa_codes`` hold label ratings printed in the
    document itself (only the keys that were found).
    """
    manufacturer: Optional[str] = None
    cas_number: Optional[str] = None
    signal_word: Optional[str] = None

    h_codes: List[str] = field(default_factory=list)
    p_codes: List[str] = field(default_factory=list)
    hazard_statements: List[HazardStatement] = field(default_factory=list)
    precautionary_statements: List[HazardStatement] = field(default_factory=list)
    pictograms: List[Pictogram] = field(default_factory=list)

    hmis_codes: HMISCodes = field(default_factory=HMISCodes)
    extracted_hmis: Dict[str, Any] = field(default_factory=dict)
    nfpa_codes: Dict[str, Any] = field(default_factory=dict)

    physical_hazards: List[str] = field(default_factory=list)
    health_hazards: List[str] = field(default_factory=list)
    environmental_hazards: List[str] = field(default_factory=list)
    first_aid: Dict[str, str] = field(default_factory=dict)

    ghs_section2: GHSSection2Data = field(default_factory=GHSSection2Data)
    section8_ppe: Optional[PPERequirements] = None

    document_type: str = 'unknown'
    quality_score: int = 0
    is_readable: bool = False

    def __post_init__(self):
        if self.signal_word is not None and self.signal_word not in SIGNAL_WORDS:
            raise ValueError(f"Invalid signal word '{self.signal_word}'")
        if not 0 <= self.quality_score <= 100:
            raise ValueError(f"Quality score must be between 0 and 100, got {self.quality_score}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'manufacturer': self.manufacturer,
            'cas_number': self.cas_number,
            'signal_word': self.signal_word,
            'h_codes': list(self.h_codes),
            'p_codes': list(self.p_codes),
            'hazard_statements': [s.to_dict() for s in self.hazard_statements],
            'precautionary_statements': [s.to_dict() for s in self.precautionary_statements],
            'pictograms': [p.to_dict() for p in self.pictograms],
            'hmis_codes': self.hmis_codes.to_dict(),
            'extracted_hmis': dict(self.extracted_hmis),
            'nfpa_codes': dict(self.nfpa_codes),
            'physical_hazards': list(self.physical_hazards),
            'health_hazards': list(self.health_hazards),
            'environmental_hazards': list(self.environmental_hazards),
            'first_aid': dict(self.first_aid),
            'ghs_section2': self.ghs_section2.to_dict(),
            'section8_ppe': self.section8_ppe.to_dict() if self.section8_ppe else None,
            'document_type': self.document_type,
            'quality_score': self.quality_score,
            'is_readable': self.is_readable,
        }


@dataclass
class ExtractionResult:
    """
    Outcome of classifying one document.

    ``record`` is always present; on failure it is a degraded record and
    ``errors`` says why.
    """
    success: bool
    record: SDSClassificationRecord
    confidence: int = 0
    warnings: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'success': self.success,
            'record': self.record.to_dict(),
            'confidence': self.confidence,
            'warnings': list(self.warnings),
            'errors': list(self.errors),
        }
