from io import BytesIO

from pytest import fixture, raises
from xlsxwriter import Workbook

from xlsxwriter_cellstream.formats import FormatDict, FormatHandler, FormatsNamespace as F, ensure_format_uniqueness


@fixture
def handler():
    wb = Workbook(BytesIO(), {'in_memory': True})

    yield FormatHandler(wb)

    wb.close()


class TestFormatDict:
    def test_merge(self):
        assert F.bold | F.italic == FormatDict({'bold': True, 'italic': True})
        assert F.bold | {'italic': True} == FormatDict({'bold': True, 'italic': True})
        assert isinstance({'italic': True} | F.bold, FormatDict)

    def test_right_side_wins(self):
        assert (F.left | F.right)['align'] == 'right'

    def test_hash_ignores_order(self):
        assert hash(F.bold | F.italic) == hash(F.italic | F.bold)


class TestFormatHandler:
    def test_memoization(self, handler):
        first = handler.verify_format(F.bold | F.center)
        second = handler.verify_format(F.center | F.bold)

        assert first is second
        assert first is not handler.verify_format(F.bold)

    def test_plain_dict(self, handler):
        assert handler.verify_format({'bold': True}) is handler.verify_format(F.bold)

    def test_empty_is_no_format(self, handler):
        assert handler.verify_format(None) is None
        assert handler.verify_format(F.base) is None


class TestUniqueness:
    def test_duplicates_rejected(self):
        with raises(ValueError, match="a and b are the same format"):
            @ensure_format_uniqueness
            class Duplicated(object):
                a = FormatDict({'bold': True})
                b = FormatDict({'bold': True})

    def test_plain_dicts_rejected(self):
        with raises(TypeError, match="must be a FormatDict"):
            @ensure_format_uniqueness
            class Plain(object):
                a = {'bold': True}
