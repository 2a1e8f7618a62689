"""
SQL parameter binding utilities.

The ParameterBinder is the single piece of mutable state in a statement
build: every literal becomes an entry here and only its placeholder reaches
the SQL text. One binder belongs to one build pass and must not be shared
across threads.
"""

from typing import Any, Dict, Iterator, List, Mapping, Optional

from portable_sql.config import get_settings
from portable_sql.exceptions import InvalidConditionError


class ParameterBinder:
    """
    Ordered, append-only mapping of placeholder name -> bound value.

    Example:
        >>> binder = ParameterBinder()
        >>> binder.bind(5)
        ':p0'
        >>> binder.bind("x")
        ':p1'
        >>> binder.params
        {'p0': 5, 'p1': 'x'}
    """

    def __init__(
        self,
        params: Optional[Mapping[str, Any]] = None,
        prefix: Optional[str] = None,
    ):
        """
        Initialize the binder.

        Args:
            params: Existing bindings to start from (keys may carry a leading ':')
            prefix: Placeholder name prefix; defaults to the configured param_prefix
        """
        self.prefix = prefix if prefix is not None else get_settings().param_prefix
        self._params: Dict[str, Any] = {}
        if params:
            self.merge(params)

    def bind(self, value: Any) -> str:
        """Bind ``value`` under a fresh name and return its placeholder text."""
        index = len(self._params)
        name = f"{self.prefix}{index}"
        # Names imported through merge() may already occupy the next slot
        while name in self._params:
            index += 1
            name = f"{self.prefix}{index}"
        self._params[name] = value
        return f":{name}"

    def merge(self, params: Mapping[str, Any]) -> None:
        """
        Import externally named bindings, e.g. a raw expression's own params.

        The SQL text refers to these names, so they cannot be renamed. A name
        already bound to a different value raises InvalidConditionError and
        leaves the binder unchanged.
        """
        incoming = {name.lstrip(":"): value for name, value in params.items()}
        for name, value in incoming.items():
            if name in self._params and not _same_value(self._params[name], value):
                raise InvalidConditionError(
                    f"Parameter '{name}' is already bound to a different value"
                )
        self._params.update(incoming)

    @property
    def params(self) -> Dict[str, Any]:
        """Copy of the bindings in allocation order."""
        return dict(self._params)

    def names(self) -> List[str]:
        return list(self._params)

    def __len__(self) -> int:
        return len(self._params)

    def __iter__(self) -> Iterator[str]:
        return iter(self._params)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lstrip(":") in self._params

    def __repr__(self) -> str:
        return f"ParameterBinder(names={self.names()!r})"


def _same_value(left: Any, right: Any) -> bool:
    if left is right:
        return True
    try:
        return bool(left == right)
    except (TypeError, ValueError):
        return False
