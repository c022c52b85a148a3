"""Localized strings for the city and judge pages.

Every locale is a full ``Messages`` instance; a translation that is missing a
field fails when this module is imported, never at render time.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
from typing import Dict, List, Optional

from core.sorting import SORT_POLICIES


class Locale(str, Enum):
    EN = "en"
    ES = "es"
    HT = "ht"


DEFAULT_LOCALE = Locale.EN


@dataclass(frozen=True)
class Messages:
    city: str
    judges: str
    judge: str
    sort_by: str
    average_rates: str
    city_stats: str
    judge_stats: str
    asylum_granted: str
    other_relief_granted: str
    denied: str
    asylum_granted_info_city: str
    other_relief_info_city: str
    denied_info_city: str
    asylum_granted_info_judge: str
    other_relief_info_judge: str
    denied_info_judge: str
    city_summary: str
    judge_summary: str
    judge_asylum_line: str
    judge_other_relief_line: str
    judge_denied_line: str
    case_singular: str
    case_plural: str
    was: str
    were: str
    city_not_found: str
    judge_not_found: str
    sort_approval_high: str
    sort_approval_low: str
    sort_cases_high: str
    sort_cases_low: str
    sort_alpha: str


EN = Messages(
    city="City",
    judges="Judges",
    judge="Judge",
    sort_by="Sort by",
    average_rates="Average Rates",
    city_stats="City Stats",
    judge_stats="Judge Stats",
    asylum_granted="Asylum Granted",
    other_relief_granted="Other Relief Granted",
    denied="Cases Denied",
    asylum_granted_info_city="This number is the percent of cases in this city where asylum was granted.",
    other_relief_info_city=(
        "This number is the percent of cases in this city where other relief, such as withholding of removal, "
        "convention against torture (CAT), or discretionary humanitarian relief was granted."
    ),
    denied_info_city="This number is the percent of cases in this city that were denied, whether asylum or other.",
    asylum_granted_info_judge="This number is the percent of cases where this judge granted asylum.",
    other_relief_info_judge=(
        "This number is the percent of cases where this judge granted other relief, such as withholding of removal, "
        "convention against torture (CAT), or discretionary humanitarian relief."
    ),
    denied_info_judge="This number is the percent of cases this judge denied, whether asylum or other.",
    city_summary=(
        "Out of {total} cases in {city}, {asylum} were granted asylum, {other} were granted other relief, "
        "and {denied} were denied"
    ),
    judge_summary="Out of {total} total {cases} for {judge}, {granted} {verb} granted asylum or other forms of relief.",
    judge_asylum_line="{count} {cases} out of {total} total {total_cases} for {judge} were granted asylum.",
    judge_other_relief_line="{count} {cases} out of {total} total {total_cases} for {judge} received other relief.",
    judge_denied_line="{count} {cases} out of {total} total {total_cases} for {judge} were denied asylum or other forms of relief.",
    case_singular="case",
    case_plural="cases",
    was="was",
    were="were",
    city_not_found="City not found",
    judge_not_found="Judge not found",
    sort_approval_high="Approval Rate (High to Low)",
    sort_approval_low="Approval Rate (Low to High)",
    sort_cases_high="Amount of Cases (High to Low)",
    sort_cases_low="Amount of Cases (Low to High)",
    sort_alpha="Alphabetical",
)

ES = Messages(
    city="Ciudad",
    judges="Jueces",
    judge="Juez",
    sort_by="Ordenar por",
    average_rates="Tasas Promedio",
    city_stats="Estadísticas de la Ciudad",
    judge_stats="Estadísticas del Juez",
    asylum_granted="Asilo Otorgado",
    other_relief_granted="Otro Alivio Otorgado",
    denied="Casos Denegados",
    asylum_granted_info_city="Este número es el porcentaje de casos en esta ciudad donde se otorgó asilo.",
    other_relief_info_city=(
        "Este número es el porcentaje de casos en esta ciudad donde se otorgó otro tipo de ayuda, como la suspensión "
        "de la deportación, la convención contra la tortura (CAT) o la ayuda humanitaria discrecional."
    ),
    denied_info_city=(
        "Este número es el porcentaje de casos en esta ciudad donde se denegaron, ya sea asilo u otro tipo de alivio."
    ),
    asylum_granted_info_judge="Este número es el porcentaje de casos en los que este juez otorgó asilo.",
    other_relief_info_judge=(
        "Este número es el porcentaje de casos en los que este juez otorgó otro alivio, como la suspensión de la "
        "deportación, convención contra la tortura (CAT) o ayuda humanitaria discrecional."
    ),
    denied_info_judge=(
        "Este número es el porcentaje de casos en los que este juez denegó, ya sea asilo u otro tipo de alivio."
    ),
    city_summary=(
        "De {total} casos en {city}, {asylum} fueron otorgados asilo, {other} fueron otorgados otro alivio, "
        "y {denied} fueron denegados"
    ),
    judge_summary="De {total} {cases} en total de {judge}, {granted} {verb} otorgados asilo u otras formas de alivio.",
    judge_asylum_line="{count} {cases} de {total} {total_cases} en total de {judge} fueron otorgados asilo.",
    judge_other_relief_line="{count} {cases} de {total} {total_cases} en total de {judge} recibieron otro alivio.",
    judge_denied_line=(
        "{count} {cases} de {total} {total_cases} en total de {judge} fueron denegados asilo u otros tipos de alivio."
    ),
    case_singular="caso",
    case_plural="casos",
    was="fue",
    were="fueron",
    city_not_found="Ciudad no encontrada",
    judge_not_found="Juez no encontrado",
    sort_approval_high="Tasa de Aprobación (Alta a Baja)",
    sort_approval_low="Tasa de Aprobación (Baja a Alta)",
    sort_cases_high="Cantidad de Casos (Alta a Baja)",
    sort_cases_low="Cantidad de Casos (Baja a Alta)",
    sort_alpha="Alfabético",
)

HT = Messages(
    city="Vil",
    judges="Jij",
    judge="Jij",
    sort_by="Triye pa",
    average_rates="To Mwayèn",
    city_stats="Estatistik Vil",
    judge_stats="Estatistik Jij",
    asylum_granted="Azil Akòde",
    other_relief_granted="Lòt Sekou Akòde",
    denied="Ka Refize",
    asylum_granted_info_city="Nimewo sa a se pousantaj ka nan vil sa a kote azil te akòde.",
    other_relief_info_city=(
        "Nimewo sa a se pousantaj ka nan vil sa a kote lòt sekou, tankou retansyon depòtasyon, Konvansyon kont Tòti "
        "(CAT), oswa sekou imanitè diskresyonè te akòde."
    ),
    denied_info_city="Nimewo sa a se pousantaj ka nan vil sa a ki te refize, kit se azil oswa lòt sekou.",
    asylum_granted_info_judge="Nimewo sa a se pousantaj ka jij sa a te akòde azil.",
    other_relief_info_judge=(
        "Nimewo sa a se pousantaj ka jij sa a te akòde lòt sekou, tankou retansyon depòtasyon, Konvansyon kont Tòti "
        "(CAT), oswa sekou imanitè diskresyonè."
    ),
    denied_info_judge="Nimewo sa a se pousantaj ka jij sa a te refize, kit se azil oswa lòt sekou.",
    city_summary=(
        "Soti nan {total} ka nan {city}, {asylum} te resevwa azil, {other} te resevwa lòt sekou, e {denied} te refize"
    ),
    judge_summary="Soti nan {total} {cases} an total pou {judge}, {granted} te resevwa azil oswa lòt fòm sekou.",
    judge_asylum_line="{count} {cases} soti nan {total} {total_cases} an total pou {judge} te resevwa azil.",
    judge_other_relief_line="{count} {cases} soti nan {total} {total_cases} an total pou {judge} resevwa lòt sekou.",
    judge_denied_line="{count} {cases} soti nan {total} {total_cases} an total pou {judge} te refize azil oswa lòt fòm sekou.",
    case_singular="ka",
    case_plural="ka",
    was="te",
    were="te",
    city_not_found="Vil pa jwenn",
    judge_not_found="Jij pa jwenn",
    sort_approval_high="To Apwobasyon (Wo a Ba)",
    sort_approval_low="To Apwobasyon (Ba a Wo)",
    sort_cases_high="Kantite Ka (Wo a Ba)",
    sort_cases_low="Kantite Ka (Ba a Wo)",
    sort_alpha="Alfabètik",
)

MESSAGES: Dict[Locale, Messages] = {Locale.EN: EN, Locale.ES: ES, Locale.HT: HT}

SORT_LABEL_FIELDS: Dict[str, str] = {
    "approvalHigh": "sort_approval_high",
    "approvalLow": "sort_approval_low",
    "casesHigh": "sort_cases_high",
    "casesLow": "sort_cases_low",
    "alpha": "sort_alpha",
}


def _validate() -> None:
    missing_locales = [loc.value for loc in Locale if loc not in MESSAGES]
    if missing_locales:
        raise RuntimeError(f"No messages for locales: {', '.join(missing_locales)}")
    names = {f.name for f in fields(Messages)}
    unlabeled = [p for p in SORT_POLICIES if SORT_LABEL_FIELDS.get(p) not in names]
    if unlabeled:
        raise RuntimeError(f"Sort policies without a label: {', '.join(unlabeled)}")
    for loc, msgs in MESSAGES.items():
        blank = [f.name for f in fields(msgs) if not getattr(msgs, f.name).strip()]
        if blank:
            raise RuntimeError(f"Blank translations for {loc.value}: {', '.join(blank)}")


_validate()


def resolve_locale(code: Optional[object]) -> Locale:
    if isinstance(code, Locale):
        return code
    try:
        return Locale(str(code or "").strip().lower())
    except ValueError:
        return DEFAULT_LOCALE


def messages_for(code: Optional[object]) -> Messages:
    return MESSAGES[resolve_locale(code)]


def pluralize_cases(msgs: Messages, count: int) -> str:
    return msgs.case_singular if count == 1 else msgs.case_plural


def sort_options(code: Optional[object]) -> List[Dict[str, str]]:
    msgs = messages_for(code)
    return [{"value": policy, "label": getattr(msgs, SORT_LABEL_FIELDS[policy])} for policy in SORT_POLICIES]
