"""
Static rule tables for SDS classification.

Every keyword list, H-code group and PPE profile used by the extractors and
the GHS->HMIS converter lives here as immutable data. Components receive a
``RuleSet`` at construction; swapping tables (another jurisdiction, a test
fixture) never touches module globals.
"""

import dataclasses
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, FrozenSet, Mapping, Optional, Tuple

HMIS_PPE_CODES = frozenset('ABCDEFGHIJKX')
PPE_ASK_SUPERVISOR = 'X'


@dataclass(frozen=True)
class CodeRule:
    """
    H-code group mapped to an HMIS rating.

    Attributes:
        rule_id: Stable identifier used in logs and tests
        codes: Numeric part of the H-codes the rule covers (e.g. 225 for H225)
        rating: Implied HMIS rating 0-4
        label: Hazard class wording used in the audit trail
        floor: True when the rule raises a minimum rather than naming a class
    """
    rule_id: str
    codes: FrozenSet[int]
    rating: int
    label: str
    floor: bool = False

    def __post_init__(self):
        if not 0 <= self.rating <= 4:
            raise ValueError(f"Rule {self.rule_id}: rating must be 0-4, got {self.rating}")


@dataclass(frozen=True)
class PPEProfile:
    """
    HMIS personal protective equipment profile.

    ``requirements`` is a conjunction of keyword groups; a group is satisfied
    when any of its keywords appears in the (lowercased) Section 8 text.
    """
    code: str
    requirements: Tuple[Tuple[str, ...], ...]
    description: str

    def __post_init__(self):
        if self.code not in HMIS_PPE_CODES or self.code == PPE_ASK_SUPERVISOR:
            raise ValueError(f"Invalid HMIS PPE profile code '{self.code}'")
        if not self.requirements:
            raise ValueError(f"PPE profile '{self.code}' has no requirements")

    def matches(self, text_lower: str) -> bool:
        """Check that every requirement group has a keyword in the text."""
        return all(
            any(keyword in text_lower for keyword in group)
            for group in self.requirements
        )


# ============================================================================
# PICTOGRAMS
# ============================================================================

PICTOGRAM_NAMES = MappingProxyType({
    'GHS01': 'exploding bomb',
    'GHS02': 'flame',
    'GHS03': 'flame over circle',
    'GHS04': 'gas cylinder',
    'GHS05': 'corrosion',
    'GHS06': 'skull and crossbones',
    'GHS07': 'exclamation mark',
    'GHS08': 'health hazard',
    'GHS09': 'environment',
})

PICTOGRAM_SYNONYMS = MappingProxyType({
    'GHS01': ('exploding bomb', 'explosive', 'explosion'),
    'GHS02': ('flame', 'flammable'),
    'GHS03': ('flame over circle', 'oxidizing', 'oxidizer', 'oxidiser'),
    'GHS04': ('gas cylinder', 'compressed gas', 'gas under pressure'),
    'GHS05': ('corrosion', 'corrosive'),
    'GHS06': ('skull and crossbones', 'toxic', 'poison'),
    'GHS07': ('exclamation mark', 'irritant', 'harmful'),
    'GHS08': ('health hazard', 'carcinogen', 'mutagenic'),
    'GHS09': ('dead tree and fish', 'aquatic toxicity', 'hazardous to the aquatic environment'),
})

# ============================================================================
# HAZARD CATEGORY KEYWORDS
# ============================================================================

PHYSICAL_HAZARD_KEYWORDS = (
    'flammable', 'explosive', 'oxidizing', 'corrosive', 'irritant',
    'compressed gas', 'self-heating', 'pyrophoric', 'organic peroxide',
)

HEALTH_HAZARD_KEYWORDS = (
    'toxic', 'carcinogenic', 'mutagenic', 'reproductive toxicity',
    'respiratory sensitizer', 'skin sensitizer', 'acute toxicity',
    'specific target organ toxicity',
)

ENVIRONMENTAL_HAZARD_KEYWORDS = (
    'hazardous to aquatic life', 'environmental hazard', 'ozone layer',
    'bioaccumulative', 'persistent', 'very toxic to aquatic life',
)

CHRONIC_HAZARD_KEYWORDS = (
    'carcinogen', 'carcinogenic', 'cancer',
    'mutagen', 'mutagenic', 'genetic',
    'reproductive', 'fertility', 'teratogen',
    'respiratory sensitizer', 'asthma',
    'specific target organ toxicity',
)

CHRONIC_FLAG_KEYWORDS = MappingProxyType({
    'is_carcinogenic': ('carcinogen', 'cancer'),
    'is_mutagenic': ('mutagen', 'genetic'),
    'has_reproductive_toxicity': ('reproductive', 'fertility', 'unborn child'),
    'has_respiratory_toxicity': ('respiratory sensiti', 'asthma', 'lung'),
    'has_skin_sensitizer': ('skin sensiti', 'allergic skin reaction'),
})

CHRONIC_FLAG_CODES = MappingProxyType({
    'is_carcinogenic': frozenset({350, 351}),
    'is_mutagenic': frozenset({340, 341}),
    'has_reproductive_toxicity': frozenset({360, 361}),
    'has_respiratory_toxicity': frozenset({334, 372}),
    'has_skin_sensitizer': frozenset({317}),
})

# ============================================================================
# HEALTH
# ============================================================================

# (low, high, category) inclusive code sub-ranges
ACUTE_TOXICITY_CATEGORY_RANGES = (
    (300, 310, 1),
    (311, 320, 2),
    (321, 330, 3),
    (331, 340, 4),
)

# Oral / dermal / inhalation acute toxicity statements
ACUTE_TOXICITY_CODES = frozenset({300, 301, 302, 310, 311, 312, 330, 331, 332})

ACUTE_TOXICITY_RATINGS = MappingProxyType({1: 4, 2: 3, 3: 2, 4: 1})

# (upper bound mg/kg, bound inclusive, rating, GHS category label)
LD50_ORAL_BANDS = (
    (5.0, False, 4, 'Category 1'),
    (50.0, True, 3, 'Category 2'),
    (300.0, True, 2, 'Category 3'),
    (2000.0, True, 1, 'Category 4'),
)
LD50_ORAL_UNCLASSIFIED = (0, 'Category 5 or Not classified')

HEALTH_CODE_RULES = (
    CodeRule('health.severe_chronic',
             frozenset({340, 341, 350, 351, 360, 361, 370, 371, 372, 373}),
             3, 'Severe chronic hazard', floor=True),
    CodeRule('health.aspiration', frozenset({304}), 4, 'Aspiration hazard', floor=True),
    CodeRule('health.corrosion', frozenset({314, 318}), 3, 'Corrosion / serious eye damage', floor=True),
    CodeRule('health.irritation', frozenset({315, 319, 320}), 1, 'Irritation', floor=True),
)

DEFAULT_HEALTH_RATING = 1

# ============================================================================
# FLAMMABILITY
# ============================================================================

FLAMMABILITY_CODE_RULES = (
    CodeRule('flammability.flammable_gas', frozenset({220, 221}), 4, 'Flammable gas'),
    CodeRule('flammability.extremely_flammable_liquid', frozenset({224, 225}), 4, 'Extremely flammable'),
    CodeRule('flammability.flammable_liquid', frozenset({226}), 3, 'Flammable liquid'),
    CodeRule('flammability.combustible_liquid', frozenset({227}), 2, 'Combustible liquid'),
    CodeRule('flammability.pyrophoric', frozenset({250, 251, 252}), 4, 'Pyrophoric/self-heating'),
)

# Fahrenheit thresholds (NFPA 30 / OSHA flammable liquid classes)
FLASH_POINT_CLASS_I = 73.0
BOILING_POINT_CLASS_IA = 100.0
FLASH_POINT_CLASS_IC = 100.0
FLASH_POINT_COMBUSTIBLE = 200.0

# ============================================================================
# PHYSICAL HAZARD
# ============================================================================

PHYSICAL_CODE_RULES = (
    CodeRule('physical.explosive_1_1', frozenset({200, 201}), 4, 'Explosive Division 1.1'),
    CodeRule('physical.explosive_1_2', frozenset({202, 203}), 3, 'Explosive Division 1.2/1.3'),
    CodeRule('physical.explosive_1_4', frozenset({204}), 2, 'Explosive Division 1.4'),
    CodeRule('physical.explosive_1_5', frozenset({205, 206}), 1, 'Explosive Division 1.5/1.6'),
    CodeRule('physical.self_reactive_a', frozenset({240}), 4, 'Self-reactive/Organic peroxide Type A'),
    CodeRule('physical.self_reactive_b', frozenset({241}), 3, 'Self-reactive/Organic peroxide Type B'),
    CodeRule('physical.self_reactive_c_f', frozenset({242}), 2, 'Self-reactive/Organic peroxide Type C-F'),
    CodeRule('physical.water_reactive_1', frozenset({260}), 4, 'Water-reactive Category 1'),
    CodeRule('physical.water_reactive_2', frozenset({261}), 3, 'Water-reactive Category 2/3'),
    CodeRule('physical.oxidizing_gas', frozenset({270}), 3, 'Oxidizing Gas'),
    CodeRule('physical.oxidizer_1', frozenset({271}), 2, 'Oxidizing Liquid/Solid Category 1'),
    CodeRule('physical.oxidizer_2', frozenset({272}), 1, 'Oxidizing Liquid/Solid Category 2/3'),
    CodeRule('physical.compressed_gas_heated', frozenset({280}), 4, 'Compressed gas that can explode when heated'),
    CodeRule('physical.refrigerated_gas', frozenset({281}), 1, 'Compressed gas'),
)

# ============================================================================
# PPE
# ============================================================================

_GLASSES = ('safety glasses', 'safety spectacles')
_GOGGLES = ('goggles',)
_FACE_SHIELD = ('face shield', 'faceshield')
_GLOVES = ('glove',)
_APRON = ('apron',)
_DUST = ('dust mask', 'dust respirator', 'particulate respirator', 'particulate filter', 'n95')
_VAPOR = ('vapor respirator', 'vapour respirator', 'organic vapor', 'organic vapour', 'vapor cartridge')
_AIRLINE = ('supplied air', 'supplied-air', 'airline', 'scba', 'self-contained breathing')
_SUIT = ('full suit', 'full protective suit', 'chemical suit', 'full body suit')
_BOOTS = ('boots',)

# Most protective first; the first fully satisfied profile wins
PPE_PROFILES = (
    PPEProfile('K', (_AIRLINE, _GLOVES, _SUIT, _BOOTS), 'Airline hood or mask, gloves, full suit, boots'),
    PPEProfile('J', (_GOGGLES, _GLOVES, _APRON, _DUST, _VAPOR), 'Splash goggles, gloves, apron, dust and vapor respirator'),
    PPEProfile('I', (_GLASSES, _GLOVES, _DUST, _VAPOR), 'Safety glasses, gloves, dust and vapor respirator'),
    PPEProfile('H', (_GOGGLES, _GLOVES, _APRON, _VAPOR), 'Splash goggles, gloves, apron, vapor respirator'),
    PPEProfile('G', (_GLASSES, _GLOVES, _VAPOR), 'Safety glasses, gloves, vapor respirator'),
    PPEProfile('F', (_GLASSES, _GLOVES, _APRON, _DUST), 'Safety glasses, gloves, apron, dust respirator'),
    PPEProfile('E', (_GLASSES, _GLOVES, _DUST), 'Safety glasses, gloves, dust respirator'),
    PPEProfile('D', (_FACE_SHIELD, _GLOVES, _APRON), 'Face shield, gloves, apron'),
    PPEProfile('C', (_GLASSES, _GLOVES, _APRON), 'Safety glasses, gloves, apron'),
    PPEProfile('B', (_GLASSES, _GLOVES), 'Safety glasses, gloves'),
    PPEProfile('A', (_GLASSES,), 'Safety glasses'),
)


def _frozen_mapping(mapping: Mapping) -> Mapping:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class RuleSet:
    """
    Immutable bundle of every classification table.

    Build with ``RuleSet()`` for the defaults or ``RuleSet.from_overrides()``
    to replace selected tables from configuration.
    """
    pictogram_names: Mapping[str, str] = field(default_factory=lambda: PICTOGRAM_NAMES)
    pictogram_synonyms: Mapping[str, Tuple[str, ...]] = field(default_factory=lambda: PICTOGRAM_SYNONYMS)
    physical_hazard_keywords: Tuple[str, ...] = PHYSICAL_HAZARD_KEYWORDS
    health_hazard_keywords: Tuple[str, ...] = HEALTH_HAZARD_KEYWORDS
    environmental_hazard_keywords: Tuple[str, ...] = ENVIRONMENTAL_HAZARD_KEYWORDS
    chronic_hazard_keywords: Tuple[str, ...] = CHRONIC_HAZARD_KEYWORDS
    chronic_flag_keywords: Mapping[str, Tuple[str, ...]] = field(default_factory=lambda: CHRONIC_FLAG_KEYWORDS)
    chronic_flag_codes: Mapping[str, FrozenSet[int]] = field(default_factory=lambda: CHRONIC_FLAG_CODES)
    acute_toxicity_category_ranges: Tuple[Tuple[int, int, int], ...] = ACUTE_TOXICITY_CATEGORY_RANGES
    acute_toxicity_codes: FrozenSet[int] = ACUTE_TOXICITY_CODES
    acute_toxicity_ratings: Mapping[int, int] = field(default_factory=lambda: ACUTE_TOXICITY_RATINGS)
    default_hazard_category: int = 1
    ld50_oral_bands: Tuple[Tuple[float, bool, int, str], ...] = LD50_ORAL_BANDS
    health_code_rules: Tuple[CodeRule, ...] = HEALTH_CODE_RULES
    default_health_rating: int = DEFAULT_HEALTH_RATING
    flammability_code_rules: Tuple[CodeRule, ...] = FLAMMABILITY_CODE_RULES
    physical_code_rules: Tuple[CodeRule, ...] = PHYSICAL_CODE_RULES
    ppe_profiles: Tuple[PPEProfile, ...] = PPE_PROFILES

    def __post_init__(self):
        if isinstance(self.default_hazard_category, bool) or self.default_hazard_category < 1:
            raise ValueError(f"default_hazard_category must be >= 1, got {self.default_hazard_category}")
        if isinstance(self.default_health_rating, bool) or not 0 <= self.default_health_rating <= 4:
            raise ValueError(f"default_health_rating must be 0-4, got {self.default_health_rating}")

    def acute_toxicity_category(self, code_number: int) -> Optional[int]:
        """Return the acute-toxicity sub-range category for a code, or None."""
        for low, high, category in self.acute_toxicity_category_ranges:
            if low <= code_number <= high:
                return category
        return None

    def hazard_category(self, code_number: int) -> int:
        """
        Coarse GHS category for a hazard class.

        Codes outside the acute-toxicity sub-ranges fall back to
        ``default_hazard_category`` (1, the most severe).
        """
        category = self.acute_toxicity_category(code_number)
        return category if category is not None else self.default_hazard_category

    def is_default_category(self, code_number: int) -> bool:
        return self.acute_toxicity_category(code_number) is None

    def match_ppe_profile(self, text: Optional[str]) -> Optional[PPEProfile]:
        """First (most protective) PPE profile fully satisfied by the text."""
        if not text or not isinstance(text, str):
            return None
        lowered = text.lower()
        for profile in self.ppe_profiles:
            if profile.matches(lowered):
                return profile
        return None

    def ppe_code_for(self, text: Optional[str]) -> str:
        """HMIS PPE letter for Section 8 text; 'X' when nothing matches."""
        profile = self.match_ppe_profile(text)
        return profile.code if profile else PPE_ASK_SUPERVISOR

    @classmethod
    def from_overrides(cls, overrides: Optional[Mapping[str, Any]] = None) -> 'RuleSet':
        """
        Build a rule set with selected tables replaced.

        Supported keys (all optional):
            pictogram_synonyms: {"GHS02": ["flame", ...], ...}
            physical_hazard_keywords / health_hazard_keywords /
            environmental_hazard_keywords / chronic_hazard_keywords: [str, ...]
            default_hazard_category: int
            default_health_rating: int
            ppe_profiles: [{"code": "B", "requires": [["safety glasses"], ["glove"]],
                            "description": "..."}, ...]  (match order)

        Args:
            overrides: Mapping loaded from the ``rules`` config section

        Returns:
            New RuleSet

        Raises:
            ValueError: If an override is malformed
        """
        rules = cls()
        if not overrides:
            return rules

        changes = {}

        if 'pictogram_synonyms' in overrides:
            synonyms = {}
            for code, keywords in overrides['pictogram_synonyms'].items():
                code = str(code).upper()
                if code not in rules.pictogram_names:
                    raise ValueError(f"Unknown pictogram code '{code}'")
                synonyms[code] = tuple(str(k).lower() for k in keywords)
            changes['pictogram_synonyms'] = _frozen_mapping(synonyms)

        for key in ('physical_hazard_keywords', 'health_hazard_keywords',
                    'environmental_hazard_keywords', 'chronic_hazard_keywords'):
            if key in overrides:
                changes[key] = tuple(str(k).lower() for k in overrides[key])

        for key in ('default_hazard_category', 'default_health_rating'):
            if key in overrides:
                value = overrides[key]
                if isinstance(value, bool) or not isinstance(value, int):
                    raise ValueError(f"{key} must be an integer, got {value!r}")
                changes[key] = value

        if 'ppe_profiles' in overrides:
            changes['ppe_profiles'] = tuple(
                PPEProfile(
                    code=str(entry['code']).upper(),
                    requirements=tuple(
                        tuple(str(k).lower() for k in group) for group in entry['requires']
                    ),
                    description=entry.get('description', ''),
                )
                for entry in overrides['ppe_profiles']
            )

        unknown = set(overrides) - set(changes)
        if unknown:
            raise ValueError(f"Unsupported rule overrides: {sorted(unknown)}")

        return dataclasses.replace(rules, **changes)


DEFAULT_RULES = RuleSet()
