"""
Scenario table for the Singlish-to-Sinhala translator.

The first block documents conversions the translator is expected to get
right. The second block feeds it degraded input (joined words, noise,
mixed English) and is marked ``should_pass=False``: its authors expect
these to fail. Both blocks are asserted the same way, so a failing run is
the normal outcome and any change in the translator shows up as a status
flip.
"""

from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from pydantic import TypeAdapter

from .models import Scenario


SCENARIOS: Tuple[Scenario, ...] = (
    Scenario(
        id="Pos_Fun_0001",
        name="Convert a simple sentence",
        input="mama gedhara yanavaa.",
        expected="මම ගෙදර යනවා.",
        should_pass=True,
    ),
    Scenario(
        id="Pos_Fun_0002",
        name="Convert interrogative greeting",
        input="oyaage saepa sanipa kohomadha?.",
        expected="ඔයාගෙ සැප සනිප කොහොමද?.",
        should_pass=True,
    ),
    Scenario(
        id="Pos_Fun_0003",
        name="Compound sentence with conjunction",
        input="api kaeema kanna yanavaa saha passe chithrapatayakuth balanavaa.",
        expected="අපි කෑම කන්න යනවා සහ පස්සෙ චිත්‍රපටයකුත් බලනවා.",
        should_pass=True,
    ),
    Scenario(
        id="Pos_Fun_0004",
        name="Complex sentence (condition)",
        input="oya enavaanam mama balan innavaa.",
        expected="ඔය එනවානම් මම බලන් ඉන්නවා.",
        should_pass=True,
    ),
    Scenario(
        id="Pos_Fun_0005",
        name="Interrogative greeting with punctuation",
        input="oyaata kohomadha?",
        expected="ඔයාට කොහොමද?",
        should_pass=True,
    ),
    Scenario(
        id="Pos_Fun_0009",
        name="Convert Negative Sentence",
        input="mama ehema karannea naehae",
        expected="මම එහෙම කරන්නේ නැහැ",
        should_pass=True,
    ),
    Scenario(
        id="Pos_Fun_0010",
        name="Convert polite request",
        input="karuNaakaralaa mata podi udhavvak karanna puLuvandha?",
        expected="කරුණාකරලා මට පොඩි උදව්වක් කරන්න පුළුවන්ද?",
        should_pass=True,
    ),

    # Degraded inputs: expected values document the translator's limitations
    Scenario(
        id="Neg_Fun_0001",
        name="Joined words (no spaces) degrade conversion",
        input="mamagedharayanavaa",
        expected="මමගෙදරයනවා",
        should_pass=False,
    ),
    Scenario(
        id="Neg_Fun_0002",
        name="Missing spacing inside phrase",
        input="matapaankannaoonee",
        expected="මටපාන්කන්නඕනේ",
        should_pass=False,
    ),
    Scenario(
        id="Neg_Fun_0004",
        name="Multiple typos and character elongation",
        input="mama gedhara yanavaa",
        expected="මම ගෙදර යනවා",
        should_pass=False,
    ),
    Scenario(
        id="Neg_Fun_0006",
        name="Slang with discourse particle",
        input="adoo vaedak baaragaththaanam eeka hariyata karapanko",
        expected="අඩෝ වැඩක් බාරගත්තානම් ඒක හරියට කරපන්කො",
        should_pass=False,
    ),
    Scenario(
        id="Neg_Fun_0008",
        name="Punctuation noise",
        input="mama..?? yanne??",
        expected="මම..?? යන්නෙ??",
        should_pass=False,
    ),
    Scenario(
        id="Neg_Fun_0011",
        name="Mixed Singlish with typo and informal spelling causes incorrect conversion",
        input="mata meeting ekak thiyenava mata eka hinda oyala ekka enna bariweyi oyala yanna",
        expected="මට meeting එකක් තියෙනව මට එක හින්ඩ ඔයල එක්ක එන්න බරිwඑයි ඔයල යන්න",
        should_pass=False,
    ),
)

_scenario_list = TypeAdapter(List[Scenario])


def ensure_unique_ids(scenarios: Iterable[Scenario]) -> Tuple[Scenario, ...]:
    """
    Return scenarios as a tuple, rejecting duplicate ids.

    Ids name the evidence files, so two scenarios sharing one would
    overwrite each other's screenshot.
    """
    seen = set()
    result = []
    for scenario in scenarios:
        if scenario.id in seen:
            raise ValueError(f"Duplicate scenario id: {scenario.id}")
        seen.add(scenario.id)
        result.append(scenario)
    return tuple(result)


def load_scenarios(path: Optional[Path] = None) -> Tuple[Scenario, ...]:
    """
    Load the scenario table.

    Args:
        path: JSON file holding an array of scenario objects (keys ``id``,
            ``name``, ``input``, ``expected``, ``shouldPass``). The built-in
            table is returned when omitted.

    Returns:
        Scenarios in file order
    """
    if path is None:
        return SCENARIOS

    with open(path, 'r', encoding='utf-8') as f:
        data = f.read()

    return ensure_unique_ids(_scenario_list.validate_json(data))


def get_scenario(scenario_id: str, scenarios: Optional[Iterable[Scenario]] = None) -> Scenario:
    """Look up a scenario by id."""
    for scenario in scenarios if scenarios is not None else SCENARIOS:
        if scenario.id == scenario_id:
            return scenario
    raise KeyError(scenario_id)
