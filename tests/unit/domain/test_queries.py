"""Validation of list and history queries."""

import pytest

from parrotwings.core.limits import SQL_INTEGER_MAX
from parrotwings.modules.accounts import AccountListQuery, normalize_email
from parrotwings.modules.transactions import TransactionQuery


class TestTransactionQuery:
    def test_defaults(self) -> None:
        query = TransactionQuery()

        assert query.sort_by == "date"
        assert query.sort_order == "asc"
        assert query.start_index == 0
        assert query.count == 10
        assert query.filter is None

    def test_sort_fields_are_case_insensitive(self) -> None:
        query = TransactionQuery(sort_by="Amount", sort_order="DESC")

        assert query.sort_by == "amount"
        assert query.sort_order == "desc"

    def test_blank_filter_is_dropped(self) -> None:
        assert TransactionQuery(filter="   ").filter is None
        assert TransactionQuery(filter=" bob ").filter == "bob"

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"sort_by": "recipient"},
            {"sort_order": "sideways"},
            {"start_index": -1},
            {"count": 0},
            {"start_index": SQL_INTEGER_MAX + 1},
        ],
    )
    def test_invalid(self, kwargs) -> None:
        with pytest.raises(ValueError):
            TransactionQuery(**kwargs)


class TestAccountListQuery:
    @pytest.mark.parametrize(
        "kwargs",
        [{"sort_by": "balance"}, {"count": -5}, {"start_index": -1}, {"start_index": 10**20}],
    )
    def test_invalid(self, kwargs) -> None:
        with pytest.raises(ValueError):
            AccountListQuery(**kwargs)

    def test_normalize_email(self) -> None:
        assert normalize_email("  Alice@Example.COM ") == "alice@example.com"
