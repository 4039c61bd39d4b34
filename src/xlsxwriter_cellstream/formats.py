from typing import Any, Dict, Mapping, Optional

from attr import Factory, attrs
from xlsxwriter import Workbook as XlsxWriterWorkbook
from xlsxwriter.format import Format


class FormatDict(Dict[str, Any]):
    """A dictionary of XlsxWriter format properties that can be merged with `|` and hashed,
    so equal property sets map to a single workbook format.

    Examples:
        >>> F = FormatDict
        >>> F({'bold': True}) | F({'italic': True}) == F({'bold': True, 'italic': True})
        True
        >>> hash(F({'bold': True, 'italic': True})) == hash(F({'italic': True, 'bold': True}))
        True
    """

    def __or__(self, other):
        return FormatDict({
            **self,
            **other
        })

    def __ror__(self, other):
        return FormatDict({
            **other,
            **self
        })

    def __hash__(self):
        return hash((*sorted(self.items()),))


@attrs(auto_attribs=True)
class FormatHandler(object):
    """Creates workbook formats on demand. Only one should be used per Workbook."""
    target: XlsxWriterWorkbook
    _memoized: Dict[int, Format] = Factory(dict)

    def verify_format(self, format_: Optional[Mapping[str, Any]]) -> Optional[Format]:
        """Return the workbook format for `format_`, adding it to the workbook the first time it is seen.
        An empty or missing `format_` means no format at all."""
        if not format_:
            return None
        format_ = FormatDict(format_)
        hashed = hash(format_)
        if hashed not in self._memoized:
            self._memoized[hashed] = self.target.add_format(format_)
        return self._memoized[hashed]


def ensure_format_uniqueness(class_):
    """Class decorator checking that every public attribute of a format catalogue is a distinct FormatDict,
    so two catalogue names never silently share one workbook format."""
    seen: Dict[FormatDict, str] = {}
    for name, value in vars(class_).items():
        if name.startswith('_'):
            continue
        if not isinstance(value, FormatDict):
            raise TypeError(f'Format {name} = {value!r} must be a FormatDict')
        if value in seen:
            raise ValueError(f'{seen[value]} and {name} are the same format')
        seen[value] = name

    return class_


@ensure_format_uniqueness
class FormatsNamespace(object):
    base = FormatDict({})

    bold = base | {'bold': True}
    italic = base | {'italic': True}
    underline = base | {'underline': True}
    wrapped = base | {'text_wrap': True}

    left = base | {'align': 'left'}
    center = base | {'align': 'center', 'valign': 'vcenter'}
    right = base | {'align': 'right'}

    integer = base | {'num_format': '0'}
    regular_float = base | {'num_format': '0.00'}
    float_with_red = base | {'num_format': '0.00;[RED]-0.00'}
    percent = base | {'num_format': '0.0%'}
    date = base | {'num_format': 'yyyy-mm-dd'}
    datetime = base | {'num_format': 'yyyy-mm-dd hh:mm:ss'}

    header = bold | center | {'bottom': 1}
    highlight_border = base | {'left': 1, 'top': 1, 'right': 1, 'bottom': 1}
