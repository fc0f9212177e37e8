"""
GHS Section 2 (Hazard Identification) structured parser.

Turns the hazard identification section of an SDS into ``GHSSection2Data``:
hazard classes with categories, temperatures in Fahrenheit, acute toxicity
values and chronic hazard flags. The converter in
``sds_hazard.conversion.hmis_converter`` consumes the result.

Temperatures and toxicity values usually live in Sections 9 and 11; when
the Section 2 window has none, those sections are searched as well.
"""

import re
from typing import List, Optional, Set

from loguru import logger

from sds_hazard.extraction.hazard_codes import iter_statements
from sds_hazard.extraction.types import (
    GHSSection2Data,
    HazardClass,
    PhysicalProperties,
    ToxicityData,
)
from sds_hazard.normalization.sections import locate_section
from sds_hazard.rules import DEFAULT_RULES, RuleSet

DEFAULT_SECTION2_WINDOW = 3000
DEFAULT_SECTION2_FALLBACK = 2000
PROPERTY_SECTION_WINDOW = 4000

# Section 2 keeps descriptions longer than five characters
SECTION2_MIN_DESCRIPTION_LENGTH = 6


def celsius_to_fahrenheit(celsius: float) -> float:
    """
    Convert a Celsius temperature to Fahrenheit.

    Examples:
        >>> celsius_to_fahrenheit(100)
        212.0
        >>> celsius_to_fahrenheit(-40)
        -40.0
    """
    return celsius * 9 / 5 + 32


_NUMBER = r'-?\d+(?:\.\d+)?'
_INEQUALITY = r'(?:[<>≤≥]=?\s*)?'


def _temperature_pattern(label: str) -> re.Pattern:
    return re.compile(
        rf'\b(?:{label})[^\d\n<>≤≥.:-]{{0,30}}?[:=]?\s*{_INEQUALITY}'
        rf'({_NUMBER})(?:\s*(?:-|–|to)\s*{_NUMBER})?\s*(?:°|º|deg(?:rees)?\.?)?\s*([CF])\b',
        re.IGNORECASE
    )


class GHSSection2Parser:
    """
    Parser for GHS Section 2 hazard identification data.

    The section is located by its heading ("Section 2: Hazard(s)
    identification", then a bare "Hazard(s) identification") and cut at the
    Section 3 heading. Without a heading the first ``fallback_length``
    characters are parsed and ``section_found`` is False.

    Args:
        rules: Rule tables (defaults to ``DEFAULT_RULES``)
        window: Maximum section length in characters
        fallback_length: Characters parsed when no heading is found
        search_property_sections: Also search Sections 9 and 11 for
            temperatures and toxicity values missing from Section 2
    """

    HEADING_PATTERNS = (
        r'\bsection\s*2\b[:.\s-]*hazard(?:s|\(s\))?\s+identification',
        r'\bhazard(?:s|\(s\))?\s+identification\b',
    )
    END_PATTERNS = (
        r'\bsection\s*3\b',
        r'\n[ \t]*3\s*[.:)]\s*composition',
    )

    SECTION9_HEADINGS = (
        r'\bsection\s*9\b[:.\s-]*physical',
        r'\bphysical\s+and\s+chemical\s+properties\b',
    )
    SECTION9_END = (r'\bsection\s*10\b',)
    SECTION11_HEADINGS = (
        r'\bsection\s*11\b[:.\s-]*toxicological',
        r'\btoxicological\s+information\b',
    )
    SECTION11_END = (r'\bsection\s*12\b',)

    PICTOGRAM_PATTERN = re.compile(r'\bGHS\s?0([1-9])\b', re.IGNORECASE)
    H_CODE_TOKEN = re.compile(r'\bH(\d{3})\b')

    TEMPERATURE_PATTERNS = (
        ('flash_point_f', _temperature_pattern(r'flash\s*point|f\.p\.')),
        ('boiling_point_f', _temperature_pattern(
            r'(?:initial\s+)?boiling\s*(?:point|range)(?:\s*/\s*boiling\s+range)?|b\.p\.')),
        ('melting_point_f', _temperature_pattern(r'(?:melting|freezing)\s*point')),
        ('auto_ignition_temp_f', _temperature_pattern(
            r'auto[\s-]?ignition\s*(?:temperature|temp\.?|point)?')),
    )

    LD50_PATTERN = re.compile(
        r'\bLD\s?50\b(?P<ctx>[^\d\n<>≤≥]{0,40}?)[:=]?\s*' + _INEQUALITY +
        r'(?P<value>\d+(?:,\d{3})*(?:\.\d+)?)\s*(?P<unit>mg/kg|g/kg)',
        re.IGNORECASE
    )
    LC50_PATTERN = re.compile(
        r'\bLC\s?50\b(?P<ctx>[^\d\n<>≤≥]{0,40}?)[:=]?\s*' + _INEQUALITY +
        r'(?P<value>\d+(?:,\d{3})*(?:\.\d+)?)\s*(?P<unit>mg/l|mg/m3|mg/m³|ppm)',
        re.IGNORECASE
    )
    SPECIES_PATTERN = re.compile(r'\b(rat|rats|mouse|mice|rabbit|guinea\s+pig)\b', re.IGNORECASE)
    SPECIES_NAMES = {'rats': 'rat', 'mice': 'mouse'}

    def __init__(self, rules: Optional[RuleSet] = None,
                 window: int = DEFAULT_SECTION2_WINDOW,
                 fallback_length: int = DEFAULT_SECTION2_FALLBACK,
                 search_property_sections: bool = True):
        self.rules = rules or DEFAULT_RULES
        self.window = window
        self.fallback_length = fallback_length
        self.search_property_sections = search_property_sections

    def parse(self, text: str) -> GHSSection2Data:
        """
        Parse Section 2 data from normalized document text.

        Args:
            text: Normalized document text

        Returns:
            GHSSection2Data (empty lists and None values on no match)
        """
        if not text or not isinstance(text, str):
            return GHSSection2Data(section_found=False)

        section = locate_section(text, self.HEADING_PATTERNS, self.END_PATTERNS,
                                 max_length=self.window, fallback_length=self.fallback_length)
        if not section.found:
            logger.warning(f"Section 2 heading not found, parsing first {self.fallback_length} characters")
        else:
            logger.debug(f"Section 2 located at offset {section.start} ({len(section.text)} chars)")

        window = section.text
        hazard_classes = self.extract_hazard_classes(window)
        lowered = window.lower()

        data = GHSSection2Data(
            hazard_classes=hazard_classes,
            physical_properties=self.extract_physical_properties(window),
            toxicity_data=self.extract_toxicity_data(window),
            chronic_hazards=self.extract_chronic_hazards(lowered),
            pictogram_codes=self.extract_pictogram_codes(window),
            section_found=section.found,
        )

        code_numbers = {hc.number for hc in hazard_classes}
        code_numbers.update(int(n) for n in self.H_CODE_TOKEN.findall(window))
        for flag in self.rules.chronic_flag_keywords:
            setattr(data, flag, self._flag_present(flag, lowered, code_numbers))

        if self.search_property_sections:
            self._fill_from_property_sections(text, data)

        return data

    def extract_hazard_classes(self, window: str) -> List[HazardClass]:
        """Hazard classes in order of appearance, one per H-code."""
        classes: List[HazardClass] = []
        seen: Set[str] = set()

        for code, description in iter_statements(window, 'H', SECTION2_MIN_DESCRIPTION_LENGTH):
            for single in code.split('+'):
                if single in seen:
                    continue
                seen.add(single)
                number = int(single[1:])
                if self.rules.is_default_category(number):
                    logger.debug(f"{single}: no category sub-range, using default {self.rules.default_hazard_category}")
                classes.append(HazardClass(
                    code=single,
                    category=self.rules.hazard_category(number),
                    description=description,
                ))

        return classes

    def extract_pictogram_codes(self, window: str) -> List[str]:
        codes: List[str] = []
        for digit in self.PICTOGRAM_PATTERN.findall(window):
            code = f"GHS0{digit}"
            if code not in codes:
                codes.append(code)
        return codes

    def extract_physical_properties(self, text: str) -> PhysicalProperties:
        """Read temperatures, converting Celsius values to Fahrenheit."""
        props = PhysicalProperties()
        for attr, pattern in self.TEMPERATURE_PATTERNS:
            value = self._first_temperature(pattern, text)
            if value is not None:
                setattr(props, attr, value)
        return props

    def extract_toxicity_data(self, text: str) -> ToxicityData:
        """
        Read oral/dermal LD50 and inhalation LC50 values.

        LD50 values in g/kg are converted to mg/kg. LC50 values in mg/m3 are
        converted to mg/L; ppm values are kept as reported with unit 'ppm'.
        The route of an LD50 comes from the words around it; an LD50 with no
        route is taken as oral.
        """
        toxicity = ToxicityData()

        for match in self.LD50_PATTERN.finditer(text):
            value = self._number(match.group('value'))
            if match.group('unit').lower() == 'g/kg':
                value *= 1000
            route = self._route(text, match)
            if route == 'dermal' and toxicity.ld50_dermal_mg_kg is None:
                toxicity.ld50_dermal_mg_kg = value
            elif route == 'oral' and toxicity.ld50_oral_mg_kg is None:
                toxicity.ld50_oral_mg_kg = value
            else:
                continue
            toxicity.species = toxicity.species or self._species(text, match)

        lc50 = self.LC50_PATTERN.search(text)
        if lc50:
            value = self._number(lc50.group('value'))
            unit = lc50.group('unit').lower()
            if unit == 'ppm':
                toxicity.unit = 'ppm'
            else:
                if unit != 'mg/l':
                    value /= 1000
                toxicity.unit = 'mg/L'
            toxicity.lc50_inhalation_mg_l = value
            toxicity.species = toxicity.species or self._species(text, lc50)
        elif toxicity.ld50_oral_mg_kg is not None or toxicity.ld50_dermal_mg_kg is not None:
            toxicity.unit = 'mg/kg'

        return toxicity

    def extract_chronic_hazards(self, lowered: str) -> List[str]:
        return [k for k in dict.fromkeys(self.rules.chronic_hazard_keywords) if k in lowered]

    def _flag_present(self, flag: str, lowered: str, code_numbers: Set[int]) -> bool:
        if any(k in lowered for k in self.rules.chronic_flag_keywords[flag]):
            return True
        return bool(code_numbers & self.rules.chronic_flag_codes.get(flag, frozenset()))

    def _fill_from_property_sections(self, text: str, data: GHSSection2Data) -> None:
        props = data.physical_properties
        missing = [
            (attr, pattern) for attr, pattern in self.TEMPERATURE_PATTERNS
            if getattr(props, attr) is None
        ]
        if missing:
            section9 = locate_section(text, self.SECTION9_HEADINGS, self.SECTION9_END,
                                      max_length=PROPERTY_SECTION_WINDOW)
            if section9 is not None:
                for attr, pattern in missing:
                    value = self._first_temperature(pattern, section9.text)
                    if value is not None:
                        logger.debug(f"{attr} read from Section 9")
                        setattr(props, attr, value)

        if not data.toxicity_data.has_data:
            section11 = locate_section(text, self.SECTION11_HEADINGS, self.SECTION11_END,
                                       max_length=PROPERTY_SECTION_WINDOW)
            if section11 is not None:
                toxicity = self.extract_toxicity_data(section11.text)
                if toxicity.has_data:
                    logger.debug("Toxicity data read from Section 11")
                    data.toxicity_data = toxicity

    def _first_temperature(self, pattern: re.Pattern, text: str) -> Optional[float]:
        match = pattern.search(text)
        if not match:
            return None
        value = float(match.group(1))
        if match.group(2).upper() == 'C':
            return celsius_to_fahrenheit(value)
        return value

    @staticmethod
    def _number(raw: str) -> float:
        return float(raw.replace(',', ''))

    def _route(self, text: str, match: re.Match) -> Optional[str]:
        line_start = text.rfind('\n', 0, match.start()) + 1
        before = text[max(line_start, match.start() - 40):match.start()]
        context = f"{before} {match.group('ctx')}".lower()
        if 'dermal' in context or 'skin' in context:
            return 'dermal'
        if 'inhal' in context:
            return None
        return 'oral'

    def _species(self, text: str, match: re.Match) -> Optional[str]:
        context = match.group('ctx') + text[match.end():match.end() + 30]
        found = self.SPECIES_PATTERN.search(context)
        if not found:
            return None
        species = re.sub(r'\s+', ' ', found.group(1).lower())
        return self.SPECIES_NAMES.get(species, species)


def parse_section2(text: str, rules: Optional[RuleSet] = None) -> GHSSection2Data:
    """Convenience wrapper around ``GHSSection2Parser(rules).parse(text)``."""
    return GHSSection2Parser(rules=rules).parse(text)