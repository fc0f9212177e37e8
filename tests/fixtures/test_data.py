"""
Test data fixtures for SDS classification testing.

Provides sample data including:
- Complete and partial SDS document texts
- Section 8 excerpts for PPE derivation
- Candidate document data for confidence matching
- Normalization and CAS extraction cases
"""

from typing import Any, Dict, List


# ============================================================================
# SAMPLE SDS DOCUMENTS
# ============================================================================

ACETONE_SDS = """SAFETY DATA SHEET
Acetone

SECTION 1: IDENTIFICATION
Product name: Acetone
CAS No.: 67-64-1
Manufacturer: Acme Chemical Co.
Emergency phone: 1-800-555-0199

SECTION 2: HAZARDS IDENTIFICATION
Classification: Flammable liquids (Category 2), Eye irritation (Category 2A)
Signal Word: DANGER
Pictograms: GHS02, GHS07
Hazard statements:
H225: Highly flammable liquid and vapor.
H319: Causes serious eye irritation.
H336: May cause drowsiness or dizziness.
Precautionary statements:
P210: Keep away from heat, hot surfaces, sparks, open flames and other ignition sources. No smoking.
P233: Keep container tightly closed.
P305+P351+P338: IF IN EYES: Rinse cautiously with water for several minutes.

SECTION 3: COMPOSITION/INFORMATION ON INGREDIENTS
Acetone 100%

SECTION 4: FIRST AID MEASURES
If inhaled: Remove person to fresh air and keep comfortable for breathing.
Skin contact: Wash off with soap and plenty of water.
In case of eye contact: Rinse cautiously with water for several minutes.
If swallowed: Rinse mouth. Do NOT induce vomiting.
Most important symptoms: Drowsiness, dizziness.

SECTION 5: FIRE-FIGHTING MEASURES
Suitable extinguishing media: Dry chemical, CO2, alcohol-resistant foam.

SECTION 8: EXPOSURE CONTROLS/PERSONAL PROTECTION
Occupational exposure limits: TWA 250 ppm (ACGIH)
Eye/face protection: Safety glasses with side-shields.
Hand protection: Butyl rubber gloves.
Respiratory protection: Not required under normal use with adequate ventilation.
Skin and body protection: Lab coat.

SECTION 9: PHYSICAL AND CHEMICAL PROPERTIES
Appearance: Clear, colorless liquid
Melting point/freezing point: -95 °C
Initial boiling point and boiling range: 56 °C
Flash point: -20 °C (closed cup)
Auto-ignition temperature: 465 °C

SECTION 10: STABILITY AND REACTIVITY
Stable under recommended storage conditions.

SECTION 11: TOXICOLOGICAL INFORMATION
LD50 Oral - Rat - 5,800 mg/kg
LD50 Dermal - Rabbit - 20,000 mg/kg
LC50 Inhalation - Rat - 76 mg/l

SECTION 12: ECOLOGICAL INFORMATION
No data available.

SECTION 16: OTHER INFORMATION
HMIS Ratings: 2/3/0/B
NFPA 704: 1-3-0
"""

FORMALIN_SDS = """SAFETY DATA SHEET
Formalin 37%
Supplier: Northwind Labs Inc.
CAS: 50-00-0

SECTION 2: HAZARDS IDENTIFICATION
Signal word: Danger
H301+H311+H331: Toxic if swallowed, in contact with skin or if inhaled
H314: Causes severe skin burns and eye damage
H317: May cause an allergic skin reaction
H341: Suspected of causing genetic defects
H350: May cause cancer
Oral LD50 (rat): 100 mg/kg

SECTION 3: COMPOSITION/INFORMATION ON INGREDIENTS
Formaldehyde 37%, methanol 10-15%
"""

LEGACY_MSDS = """MATERIAL SAFETY DATA SHEET
Product: Mineral Spirits
Manufactured by: Old Line Solvents
Flash point: 105 F
NFPA Health: 1 Fire: 2 Reactivity: 0
WARNING: Combustible liquid
"""

PRODUCT_DATA_SHEET = """Product Data Sheet
Widget Cleaner
Applications: general purpose cleaning of painted surfaces.
Packaging: 1 L and 5 L bottles.
"""

MINIMAL_H225_TEXT = "CAS: 67-64-1\nSignal Word: DANGER\nH225: Highly flammable liquid and vapor"


# ============================================================================
# SECTION 8 EXCERPTS -> EXPECTED HMIS PPE LETTER
# ============================================================================

SECTION8_PPE_CASES: List[Dict[str, str]] = [
    {'text': 'Wear safety glasses and nitrile gloves.', 'expected': 'B'},
    {'text': 'Safety glasses, gloves and a rubber apron.', 'expected': 'C'},
    {'text': 'Use a face shield, gloves and an apron.', 'expected': 'D'},
    {'text': 'Safety glasses, gloves, N95 dust mask.', 'expected': 'E'},
    {'text': 'Safety glasses, gloves, organic vapor respirator.', 'expected': 'G'},
    {'text': 'Splash goggles, gloves, apron and organic vapor respirator.', 'expected': 'H'},
    {'text': 'Supplied air respirator, gloves, full suit and boots.', 'expected': 'K'},
    {'text': 'Safety glasses.', 'expected': 'A'},
    {'text': 'Handle in accordance with good industrial hygiene practice.', 'expected': 'X'},
]


# ============================================================================
# CANDIDATE DOCUMENTS FOR MATCHING
# ============================================================================

ACETONE_CANDIDATE: Dict[str, Any] = {
    'product_name': 'Acetone',
    'cas_number': '67-64-1',
    'manufacturer': 'Acme Chemical Co.',
    'h_codes': ['H225', 'H319', 'H336'],
    'hazard_statements': [
        'Highly flammable liquid and vapor',
        'Causes serious eye irritation',
        'May cause drowsiness or dizziness',
    ],
    'signal_word': 'DANGER',
    'pictograms': ['flame', 'exclamation mark'],
    'document_id': 'acme-acetone',
}

NAIL_POLISH_CANDIDATE: Dict[str, Any] = {
    'product_name': 'Acetone-Free Nail Polish Remover',
    'cas_number': None,
    'manufacturer': 'Beauty Supply Ltd',
    'h_codes': ['H319'],
    'hazard_statements': ['Causes serious eye irritation'],
    'signal_word': 'WARNING',
    'pictograms': ['exclamation mark'],
    'document_id': 'nail-polish',
}


# ============================================================================
# NORMALIZATION / CAS TEST CASES
# ============================================================================

NORMALIZATION_TEST_CASES = [
    ("Signal  Word:\tDANGER", "Signal Word: DANGER"),
    ("H225\r\nH319", "H225\nH319"),
    ("Line one\n\n\n  Line two", "Line one\nLine two"),
    ("\ufeffSafety Data Sheet\ufffd", "Safety Data Sheet"),
    ("  padded  ", "padded"),
    ("bell\x07 char", "bell char"),
    ("Signal\x85 Word\x9f: DANGER", "Signal Word: DANGER"),
]

CAS_EXTRACTION_TEST_CASES = [
    ("Acetone (CAS: 67-64-1)", "67-64-1"),
    ("CAS No. 108-88-3", "108-88-3"),
    ("CAS#50-00-0", "50-00-0"),
    ("CAS Number: 7664-93-9", "7664-93-9"),
    ("Toluene 108-88-3", "108-88-3"),
    ("Part 123-45-6", None),
    ("No identifiers here", None),
    ("", None),
]

VALID_CAS_NUMBERS = ['67-64-1', '108-88-3', '50-00-0', '7664-93-9', '7732-18-5', '71-43-2']
INVALID_CAS_NUMBERS = ['67-64-2', '108-88-4', '50-00-1', '123-45-6']
