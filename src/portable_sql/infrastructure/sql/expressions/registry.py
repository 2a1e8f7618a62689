"""
Expression builder registry.

Maps expression ``kind`` tags to condition builders. A registry must cover
every built-in variant: an incomplete mapping fails when the registry is
constructed rather than on the first condition that needs the missing
builder. Custom variants can be added under their own tags.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional, Type, Union

from portable_sql.exceptions import ExpressionRegistryError, UnregisteredExpressionError
from portable_sql.utils.logging import get_logger

from ..core.parameters import ParameterBinder
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
from .model import ExpressionKind

if TYPE_CHECKING:  # pragma: no cover - imported only for typing
    from ..operations.builder import QueryBuilder

logger = get_logger(__name__)

DEFAULT_BUILDERS: Mapping[str, Type[ExpressionBuilder]] = {
    ExpressionKind.RAW.value: RawExpressionBuilder,
    ExpressionKind.COMPARISON.value: ComparisonBuilder,
    ExpressionKind.BETWEEN.value: BetweenValueBuilder,
    ExpressionKind.BETWEEN_COLUMNS.value: BetweenColumnsBuilder,
    ExpressionKind.IN.value: InListBuilder,
    ExpressionKind.LIKE.value: LikeBuilder,
    ExpressionKind.EXISTS.value: ExistsBuilder,
    ExpressionKind.CONJUNCTION.value: ConjunctionBuilder,
    ExpressionKind.NOT.value: NegationBuilder,
    ExpressionKind.HASH.value: HashConditionBuilder,
}


class ExpressionBuilderRegistry:
    """
    Resolves the condition builder for an expression by its ``kind`` tag.

    Builders are instantiated once per registry and share the registry's
    QueryBuilder.

    Example:
        >>> registry = ExpressionBuilderRegistry(query_builder)
        >>> registry.build(Comparison("age", ">", 18), ParameterBinder())
        '"age" > :p0'
    """

    def __init__(
        self,
        query_builder: QueryBuilder,
        builders: Optional[Mapping[Union[str, ExpressionKind], Type[ExpressionBuilder]]] = None,
    ):
        """
        Initialize the registry.

        Args:
            query_builder: Builder that condition builders call back into
            builders: Full kind -> builder class mapping; defaults to DEFAULT_BUILDERS

        Raises:
            ExpressionRegistryError: If a built-in variant has no builder
        """
        source = DEFAULT_BUILDERS if builders is None else builders
        mapping: Dict[str, Type[ExpressionBuilder]] = {
            str(kind): builder for kind, builder in source.items()
        }
        missing = [kind.value for kind in ExpressionKind if kind.value not in mapping]
        if missing:
            logger.error("expression_registry_incomplete", missing=missing)
            raise ExpressionRegistryError(missing)

        self.query_builder = query_builder
        self._builder_classes = mapping
        self._builders: Dict[str, ExpressionBuilder] = {}

    def register(
        self, kind: Union[str, ExpressionKind], builder_class: Type[ExpressionBuilder]
    ) -> None:
        """Register (or replace) the builder for ``kind``."""
        key = str(kind)
        self._builder_classes[key] = builder_class
        self._builders.pop(key, None)
        logger.debug("expression_builder_registered", kind=key, builder=builder_class.__name__)

    def kinds(self) -> List[str]:
        """List all registered expression kinds."""
        return sorted(self._builder_classes)

    def get_builder(self, expression: Any) -> ExpressionBuilder:
        """Return the builder for ``expression``."""
        kind = getattr(expression, "kind", None)
        key = str(kind) if kind is not None else type(expression).__name__
        if key not in self._builder_classes:
            logger.error("expression_builder_missing", kind=key)
            raise UnregisteredExpressionError(key, self.kinds())

        builder = self._builders.get(key)
        if builder is None:
            builder = self._builder_classes[key](self.query_builder)
            self._builders[key] = builder
        return builder

    def build(self, expression: Any, params: ParameterBinder) -> str:
        """Render ``expression`` with its registered builder."""
        return self.get_builder(expression).build(expression, params)
