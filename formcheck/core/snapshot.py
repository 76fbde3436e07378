"""
Form snapshot.

Aggregates the current values of every field plus computed form additions
into one read-only mapping, ready for submission.
"""

from collections.abc import Mapping
from datetime import datetime
from typing import Any, Callable, Dict, Iterator, Optional, Sequence, Union

from formcheck.core.fields import Field

FormAddition = Union[Any, Callable[[], Any]]


class FormSnapshot(Mapping):
    """
    Read-only mapping of field name to value.

    Values are text for plain fields, bool for checkbox/radio fields and an
    ordered list for grouped fields. Form additions are evaluated when the
    snapshot is taken and override same-named fields.
    """

    def __init__(self, fields: Dict[str, Any], additions: Optional[Dict[str, Any]] = None):
        self.fields = dict(fields)
        self.additions = dict(additions or {})
        self.taken_at = datetime.utcnow()

        self._data = dict(self.fields)
        self._data.update(self.additions)

    @classmethod
    def capture(
        cls,
        fields: Sequence[Field],
        form_additions: Optional[Dict[str, FormAddition]] = None
    ) -> "FormSnapshot":
        values = {field.name: field.value for field in fields}

        additions = {}
        for name, addition in (form_additions or {}).items():
            additions[name] = addition() if callable(addition) else addition

        return cls(values, additions)

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a plain dictionary for submission"""
        return dict(self._data)

    def __repr__(self) -> str:
        return f"FormSnapshot({self._data!r})"
