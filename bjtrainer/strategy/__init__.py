"""Strategy tables and deviations."""

from bjtrainer.hand import Action
from bjtrainer.strategy.basic import (
    StrategyCode,
    StrategyLookup,
    get_basic_strategy_action,
    get_basic_strategy_code,
    lookup,
)
from bjtrainer.strategy.deviations import (
    FAB_4,
    ILLUSTRIOUS_18,
    INSURANCE_INDEX,
    IndexPlay,
    find_deviations,
    get_deviation_action,
    get_strategy_action,
    should_take_insurance,
)
from bjtrainer.strategy.reasoning import explain_decision, get_decision_summary

__all__ = [
    "Action",
    "StrategyCode",
    "StrategyLookup",
    "get_basic_strategy_action",
    "get_basic_strategy_code",
    "lookup",
    "IndexPlay",
    "ILLUSTRIOUS_18",
    "FAB_4",
    "INSURANCE_INDEX",
    "find_deviations",
    "get_deviation_action",
    "get_strategy_action",
    "should_take_insurance",
    "explain_decision",
    "get_decision_summary",
]
