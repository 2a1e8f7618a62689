"""Expression model, condition builders and the builder registry."""

from .conditions import (
    BetweenColumnsBuilder,
    BetweenValueBuilder,
    ComparisonBuilder,
    ConjunctionBuilder,
    ExistsBuilder,
    ExpressionBuilder,
    HashConditionBuilder,
    InListBuilder,
    LikeBuilder,
    NegationBuilder,
    RawExpressionBuilder,
)
from .model import (
    BetweenColumns,
    BetweenValue,
    Comparison,
    Conjunction,
    Exists,
    Expression,
    ExpressionKind,
    HashCondition,
    InList,
    Like,
    Negation,
    RawExpression,
    Statement,
    and_,
    not_,
    or_,
)
from .registry import DEFAULT_BUILDERS, ExpressionBuilderRegistry

__all__ = [
    "Expression",
    "ExpressionKind",
    "Statement",
    "RawExpression",
    "Comparison",
    "BetweenValue",
    "BetweenColumns",
    "InList",
    "Like",
    "Exists",
    "Conjunction",
    "Negation",
    "HashCondition",
    "and_",
    "or_",
    "not_",
    "ExpressionBuilder",
    "RawExpressionBuilder",
    "ComparisonBuilder",
    "BetweenValueBuilder",
    "BetweenColumnsBuilder",
    "InListBuilder",
    "LikeBuilder",
    "ExistsBuilder",
    "ConjunctionBuilder",
    "NegationBuilder",
    "HashConditionBuilder",
    "DEFAULT_BUILDERS",
    "ExpressionBuilderRegistry",
]
