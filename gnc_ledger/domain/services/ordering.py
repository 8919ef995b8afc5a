"""Global transaction ordering."""

import re
from functools import cmp_to_key

from gnc_ledger.domain.models.ledger import Transaction

_INTEGER = re.compile(r"[+-]?\d+", re.ASCII)


def _as_int(token: str | None) -> int | None:
    text = (token or "").strip()
    if _INTEGER.fullmatch(text) is None:
        return None
    return int(text)


def compare_num(left: str | None, right: str | None) -> int:
    """Compare "num" tokens numerically when both are integers, else as text."""
    left_int, right_int = _as_int(left), _as_int(right)
    if left_int is not None and right_int is not None:
        return (left_int > right_int) - (left_int < right_int)
    left_text, right_text = left or "", right or ""
    return (left_text > right_text) - (left_text < right_text)


def compare_transactions(left: Transaction, right: Transaction) -> int:
    """Order by posting date, then "num", then entry timestamp."""
    if left.post_date != right.post_date:
        return -1 if left.post_date < right.post_date else 1
    by_num = compare_num(left.num, right.num)
    if by_num:
        return by_num
    if left.enter_date != right.enter_date:
        return -1 if left.enter_date < right.enter_date else 1
    return 0


transaction_sort_key = cmp_to_key(compare_transactions)


__all__ = ["compare_num", "compare_transactions", "transaction_sort_key"]
