# pylint: disable=missing-docstring
import datetime

import pytest
from attrs.exceptions import FrozenInstanceError

from typedpipe.data import Data
from typedpipe.util.time import UTC


class TestData:
    def test_wraps_value_with_utc_timestamp(self):
        data = Data(10)
        assert data.value == 10
        assert data.timestamp.tzinfo is UTC

    def test_accepts_explicit_timestamp(self):
        timestamp = datetime.datetime(2024, 1, 1, tzinfo=UTC)
        assert Data("a", timestamp).timestamp == timestamp

    def test_rejects_non_datetime_timestamp(self):
        with pytest.raises(TypeError):
            Data("a", "2024-01-01")

    def test_is_immutable(self):
        data = Data(10)
        with pytest.raises(FrozenInstanceError):
            data.value = 11

    def test_equality_ignores_timestamp(self):
        assert Data(10) == Data(10, datetime.datetime(2000, 1, 1, tzinfo=UTC))
        assert Data(10) != Data(11)

    def test_restamp_keeps_value_and_renews_timestamp(self):
        old = Data(10, datetime.datetime(2000, 1, 1, tzinfo=UTC))
        new = old.restamp()
        assert new is not old
        assert new.value == 10
        assert new.timestamp > old.timestamp

    def test_restamp_with_new_value(self):
        assert Data(10).restamp(20).value == 20

    def test_restamp_with_none_value(self):
        assert Data(10).restamp(None).value is None

    def test_generic_alias_can_be_instantiated(self):
        assert Data[int](5).value == 5
