"""
Module listing extraction for both ancestor and trigger schemas.
"""
import logging
import re
from typing import Dict, List, Optional, Sequence, Tuple

from .config import config
from .dom import HtmlDocument, HtmlNode
from .exceptions import ExtractionError
from .models import ModuleRecord, Stat
from .utils import split_lines, unique_append

logger = logging.getLogger(__name__)

# Schemas
ANCESTOR = "ancestor"
TRIGGER = "trigger"

# Shared selectors
NAME_SELECTORS = (".row-wrapper .name", ".module-name")
CATEGORY_SEL = ".row-wrapper .type"
PLATFORM_SEL = ".seller .platform"
REROLL_SEL = ".seller .reroll span"
NICKNAME_SEL = ".seller .nickname"
SELLER_STATE_SEL = "i"
SELLER_RANK_SEL = ".seller .rank span"
PRICE_SEL = ".price"
REG_DATE_SEL = ".information .date span"

# Ancestor selectors
SOCKET_SELECTORS = (".ancestor-info .socket-type", ".item__info .socket-type")
ANCESTOR_RANK_SEL = ".ancestor-info .required-rank span"
ANCESTOR_STAT_SEL = ".item__details .option-name"

# Trigger selectors
TRIGGER_RANK_SELECTORS = (
    ".item__info .required-mastery-rank span",
    ".item__info .required-rank span",
)
TRIGGER_OPTION_SEL = ".item__details .option"
TRIGGER_OPTION_NAME_SEL = ".option-name"
TRIGGER_OPTION_VALUE_SEL = ".option-value"

_SIGN_PREFIX = re.compile(r"^\((?:\+|-)\)")


def get_text(node: HtmlNode, selector: str) -> str:
    """Trimmed text of the first match, or empty string."""
    el = node.select_one(selector)
    return el.text().strip() if el else ""


def first_present(node: HtmlNode, selectors: Sequence[str]) -> Optional[HtmlNode]:
    """First element matched by the selectors, tried in order."""
    for sel in selectors:
        el = node.select_one(sel)
        if el is not None:
            return el
    return None


def classify(category: str) -> str:
    """Pick the listing schema from its category label."""
    return TRIGGER if "trigger" in (category or "").lower() else ANCESTOR


def parse_seller(item: HtmlNode) -> Tuple[str, str]:
    """Return (seller_name, seller_status) from the nickname node."""
    nick = item.select_one(NICKNAME_SEL)
    if nick is None:
        return "", ""

    leading = nick.first_child_text()
    seller_name = leading.strip() if leading is not None else nick.text().strip()
    state = nick.select_one(SELLER_STATE_SEL)
    seller_status = state.text().strip() if state else ""
    return seller_name, seller_status


def parse_price(item: HtmlNode) -> str:
    """Join the direct text segments of the price node, skipping nested markup."""
    price_el = item.select_one(PRICE_SEL)
    if price_el is None:
        return ""
    segments = [t.strip() for t in price_el.direct_texts()]
    return " ".join(s for s in segments if s)


def common_fields(item: HtmlNode) -> Dict[str, str]:
    """Fields read the same way for every schema."""
    name = ""
    for sel in NAME_SELECTORS:
        name = get_text(item, sel)
        if name:
            break

    seller_name, seller_status = parse_seller(item)
    return {
        "name": name,
        "category": get_text(item, CATEGORY_SEL),
        "price": parse_price(item),
        "platform": get_text(item, PLATFORM_SEL),
        "reroll_count": get_text(item, REROLL_SEL),
        "seller_name": seller_name,
        "seller_status": seller_status,
        "seller_rank": get_text(item, SELLER_RANK_SEL),
        "reg_date": get_text(item, REG_DATE_SEL),
    }


def ancestor_attribute(raw: str) -> str:
    """Attribute name of an ancestor stat: sign marker and value range removed."""
    return _SIGN_PREFIX.sub("", raw).split("[")[0].strip()


def trigger_attribute(label: str) -> str:
    """Attribute name of a trigger stat: everything before the range in parentheses."""
    return label.split("(")[0].strip()


def parse_ancestor(item: HtmlNode) -> Dict:
    """
    Ancestor modules carry a socket type, a required rank and signed stats.

    A single option-name element may hold several stat lines.
    """
    socket_el = first_present(item, SOCKET_SELECTORS)
    socket_type = socket_el.text().strip() if socket_el else ""

    attributes: List[str] = []
    stats: List[Stat] = []
    for opt in item.select_all(ANCESTOR_STAT_SEL):
        for raw in split_lines(opt.text()):
            unique_append(attributes, ancestor_attribute(raw))
            stats.append(Stat(
                raw=raw,
                positive=raw.startswith("(+)"),
                negative=raw.startswith("(-)"),
            ))

    return {
        "socket_type": socket_type,
        "required_rank": get_text(item, ANCESTOR_RANK_SEL),
        "attributes": attributes,
        "stats": stats,
    }


def parse_trigger(item: HtmlNode) -> Dict:
    """Trigger modules have no socket and their stats are always neutral."""
    rank_el = first_present(item, TRIGGER_RANK_SELECTORS)
    required_rank = rank_el.text().strip() if rank_el else ""

    attributes: List[str] = []
    stats: List[Stat] = []
    for opt in item.select_all(TRIGGER_OPTION_SEL):
        label = get_text(opt, TRIGGER_OPTION_NAME_SEL)
        value = get_text(opt, TRIGGER_OPTION_VALUE_SEL)
        unique_append(attributes, trigger_attribute(label))
        stats.append(Stat(raw=f"{label} {value}"))

    return {
        "socket_type": "",
        "required_rank": required_rank,
        "attributes": attributes,
        "stats": stats,
    }


SCHEMA_PARSERS = {
    ANCESTOR: parse_ancestor,
    TRIGGER: parse_trigger,
}


def parse_module(item: HtmlNode) -> ModuleRecord:
    """Convert one listing node into a ModuleRecord."""
    fields = common_fields(item)
    schema = classify(fields["category"])
    fields.update(SCHEMA_PARSERS[schema](item))
    return ModuleRecord(**fields)


def extract_modules(
    document: HtmlDocument,
    container_selector: str = config.CONTAINER_SELECTOR,
    item_selector: str = config.ITEM_SELECTOR,
) -> List[ModuleRecord]:
    """
    Parse every listing node of a stabilized page, in DOM order.

    Raises ExtractionError when the listing container is missing. A present
    container with no items yields an empty list.
    """
    if document.select_one(container_selector) is None:
        raise ExtractionError(f"Listing container not found: {container_selector!r}")

    modules = [parse_module(item) for item in document.select_all(item_selector)]
    triggers = sum(1 for m in modules if classify(m.category) == TRIGGER)
    logger.info(
        f">>> Parsed {len(modules)} modules "
        f"({len(modules) - triggers} ancestor, {triggers} trigger)"
    )
    return modules
