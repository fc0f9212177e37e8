"""
GHS to HMIS rating conversion.

Derives HMIS label ratings (health, flammability, physical, PPE) from parsed
GHS Section 2 data. Each rating is a fold over an ordered list of rules:
every rule that fires implies a rating and appends its justification to the
audit trail, and the axis takes the maximum implied rating. Adding data can
therefore only raise a rating, never lower it.

Rating scale (0-4):
  - 4: Severe
  - 3: Serious
  - 2: Moderate
  - 1: Slight
  - 0: Minimal
"""

from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Sequence

from loguru import logger

from sds_hazard.extraction.types import GHSSection2Data, HMISCodes
from sds_hazard.rules import (
    BOILING_POINT_CLASS_IA,
    DEFAULT_RULES,
    FLASH_POINT_CLASS_I,
    FLASH_POINT_CLASS_IC,
    FLASH_POINT_COMBUSTIBLE,
    LD50_ORAL_UNCLASSIFIED,
    PPE_ASK_SUPERVISOR,
    CodeRule,
    RuleSet,
)

AXIS_PREFIXES = {'Health': 'H', 'Flammability': 'F', 'Physical': 'PH'}


@dataclass(frozen=True)
class Firing:
    """One rule firing: the implied rating and its audit line."""
    rule_id: str
    rating: int
    justification: str


RatingRule = Callable[[GHSSection2Data], Iterable[Firing]]


def _audit(axis: str, rating: int, text: str, floor: bool = False) -> str:
    prefix = AXIS_PREFIXES[axis]
    return f"{axis} {'≥' if floor else ''}{prefix}{rating}: {text}"


def _format_number(value: float) -> str:
    return f"{value:g}"


class GHSToHMISConverter:
    """
    Converts GHS Section 2 data to HMIS codes.

    Args:
        rules: Rule tables (defaults to ``DEFAULT_RULES``)

    Examples:
        >>> from sds_hazard.extraction.types import GHSSection2Data, HazardClass
        >>> data = GHSSection2Data(hazard_classes=[
        ...     HazardClass('H319', 2, 'Causes serious eye irritation')])
        >>> codes = GHSToHMISConverter().convert(data)
        >>> (codes.health, codes.flammability, codes.physical, codes.ppe)
        (1, 0, 0, 'X')
    """

    def __init__(self, rules: Optional[RuleSet] = None):
        self.rules = rules or DEFAULT_RULES

        self.health_rules: Sequence[RatingRule] = (
            self._ld50_rule,
            self._acute_toxicity_rule,
            self._code_table_rule('Health', self.rules.health_code_rules),
        )
        self.flammability_rules: Sequence[RatingRule] = (
            self._flash_point_rule,
            self._code_table_rule('Flammability', self.rules.flammability_code_rules),
        )
        self.physical_rules: Sequence[RatingRule] = (
            self._code_table_rule('Physical', self.rules.physical_code_rules),
        )

    def convert(self, ghs_data: GHSSection2Data, section8_text: Optional[str] = None) -> HMISCodes:
        """
        Convert parsed GHS data into HMIS ratings.

        Args:
            ghs_data: Parsed Section 2 data
            section8_text: Section 8 text used to choose the PPE letter

        Returns:
            HMISCodes with an ordered audit trail in ``calculation_details``
        """
        details: List[str] = []

        health = self._fold(self.health_rules, ghs_data, details)
        if health == 0 and ghs_data.toxicity_data.ld50_oral_mg_kg is None and not ghs_data.hazard_classes:
            health = self.rules.default_health_rating
            details.append(_audit('Health', health, "Default rating - no specific toxicity data found"))

        flammability = self._fold(self.flammability_rules, ghs_data, details)
        if flammability == 0:
            if ghs_data.hazard_classes:
                details.append(_audit('Flammability', 0, "No flammability hazards identified"))
            else:
                details.append(_audit('Flammability', 0, "No flammability data found"))

        physical = self._fold(self.physical_rules, ghs_data, details)
        if physical == 0:
            details.append(_audit('Physical', 0, "No significant physical hazards identified"))

        ppe = self._ppe(section8_text, details)

        codes = HMISCodes(
            health=health,
            flammability=flammability,
            physical=physical,
            ppe=ppe,
            has_chronic_hazard=self.has_chronic_hazard(ghs_data),
            confidence=self.calculate_confidence(ghs_data),
            calculation_details=details,
        )
        logger.debug(f"HMIS {codes.label} (confidence {codes.confidence})")
        return codes

    @staticmethod
    def _fold(rules: Sequence[RatingRule], data: GHSSection2Data, details: List[str]) -> int:
        rating = 0
        for rule in rules:
            for firing in rule(data):
                details.append(firing.justification)
                rating = max(rating, firing.rating)
        return rating

    # ========================================================================
    # HEALTH
    # ========================================================================

    def _ld50_rule(self, data: GHSSection2Data) -> Iterable[Firing]:
        ld50 = data.toxicity_data.ld50_oral_mg_kg
        if ld50 is None:
            return

        value = _format_number(ld50)
        for bound, inclusive, rating, category in self.rules.ld50_oral_bands:
            if ld50 < bound or (inclusive and ld50 == bound):
                comparison = '≤' if inclusive else '<'
                yield Firing('health.ld50_oral', rating, _audit(
                    'Health', rating,
                    f"LD50 {value} mg/kg {comparison} {_format_number(bound)} mg/kg ({category})"))
                return

        rating, category = LD50_ORAL_UNCLASSIFIED
        top = _format_number(self.rules.ld50_oral_bands[-1][0])
        yield Firing('health.ld50_oral', rating, _audit(
            'Health', rating, f"LD50 {value} mg/kg > {top} mg/kg ({category})"))

    def _acute_toxicity_rule(self, data: GHSSection2Data) -> Iterable[Firing]:
        for hazard in data.hazard_classes:
            if hazard.number not in self.rules.acute_toxicity_codes:
                continue
            category = self.rules.acute_toxicity_category(hazard.number)
            rating = self.rules.acute_toxicity_ratings.get(category)
            if rating is None:
                continue
            yield Firing('health.acute_toxicity', rating, _audit(
                'Health', rating,
                f"{hazard.code} - {hazard.description} (Acute toxicity Category {category})"))

    # ========================================================================
    # FLAMMABILITY
    # ========================================================================

    def _flash_point_rule(self, data: GHSSection2Data) -> Iterable[Firing]:
        fp = data.physical_properties.flash_point_f
        if fp is None:
            return
        bp = data.physical_properties.boiling_point_f
        fp_text = _format_number(fp)

        if fp < FLASH_POINT_CLASS_I:
            if bp is not None and bp < BOILING_POINT_CLASS_IA:
                rating = 4
                reason = (f"Flash point {fp_text}°F < {FLASH_POINT_CLASS_I:g}°F and "
                          f"BP {_format_number(bp)}°F < {BOILING_POINT_CLASS_IA:g}°F")
            else:
                rating = 3
                reason = (f"Flash point {fp_text}°F < {FLASH_POINT_CLASS_I:g}°F and "
                          f"BP ≥ {BOILING_POINT_CLASS_IA:g}°F or unknown")
        elif fp <= FLASH_POINT_CLASS_IC:
            rating = 3
            reason = f"Flash point {fp_text}°F between {FLASH_POINT_CLASS_I:g}-{FLASH_POINT_CLASS_IC:g}°F"
        elif fp <= FLASH_POINT_COMBUSTIBLE:
            rating = 2
            reason = f"Flash point {fp_text}°F between {FLASH_POINT_CLASS_IC:g}-{FLASH_POINT_COMBUSTIBLE:g}°F"
        else:
            rating = 1
            reason = f"Flash point {fp_text}°F > {FLASH_POINT_COMBUSTIBLE:g}°F"

        yield Firing('flammability.flash_point', rating, _audit('Flammability', rating, reason))

    # ========================================================================
    # H-CODE TABLES
    # ========================================================================

    @staticmethod
    def _code_table_rule(axis: str, table: Sequence[CodeRule]) -> RatingRule:
        def rule(data: GHSSection2Data) -> Iterable[Firing]:
            for hazard in data.hazard_classes:
                for code_rule in table:
                    if hazard.number in code_rule.codes:
                        yield Firing(code_rule.rule_id, code_rule.rating, _audit(
                            axis, code_rule.rating,
                            f"{hazard.code} - {hazard.description} ({code_rule.label})",
                            floor=code_rule.floor))
        return rule

    # ========================================================================
    # PPE / CHRONIC / CONFIDENCE
    # ========================================================================

    def _ppe(self, section8_text: Optional[str], details: List[str]) -> str:
        profile = self.rules.match_ppe_profile(section8_text)
        if profile is None:
            reason = "no Section 8 text" if not section8_text else "no PPE profile matched"
            details.append(f"PPE {PPE_ASK_SUPERVISOR}: Ask supervisor ({reason})")
            return PPE_ASK_SUPERVISOR
        details.append(f"PPE {profile.code}: {profile.description}")
        return profile.code

    @staticmethod
    def has_chronic_hazard(data: GHSSection2Data) -> bool:
        """Chronic asterisk: any of the four chronic flags or a chronic keyword."""
        return (
            data.is_carcinogenic
            or data.is_mutagenic
            or data.has_reproductive_toxicity
            or data.has_respiratory_toxicity
            or bool(data.chronic_hazards)
        )

    @staticmethod
    def calculate_confidence(data: GHSSection2Data) -> int:
        """Score 0-100 reflecting how much source data backed the ratings."""
        confidence = 0
        if data.hazard_classes:
            confidence += 30
        if data.toxicity_data.ld50_oral_mg_kg is not None:
            confidence += 25
        if data.physical_properties.flash_point_f is not None:
            confidence += 20
        if data.chronic_hazards:
            confidence += 15
        if data.physical_properties.boiling_point_f is not None:
            confidence += 10
        return min(confidence, 100)


def convert_to_hmis(ghs_data: GHSSection2Data, section8_text: Optional[str] = None,
                    rules: Optional[RuleSet] = None) -> HMISCodes:
    """Convenience wrapper around ``GHSToHMISConverter(rules).convert()``."""
    return GHSToHMISConverter(rules=rules).convert(ghs_data, section8_text)
