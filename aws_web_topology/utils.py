"""Shared helpers for AWS lookups."""
from __future__ import annotations

from typing import Iterable, Iterator, List, TypeVar

from botocore.exceptions import OperationNotPageableError

T = TypeVar("T")


def safe_paginate(client, method_name: str, result_key: str, **kwargs) -> Iterator[dict]:
    """Iterate through boto3 results whether or not ``method_name`` paginates."""

    try:
        paginator = client.get_paginator(method_name)
    except OperationNotPageableError:
        response = getattr(client, method_name)(**kwargs)
        for item in response.get(result_key, []):
            yield item
        return

    for page in paginator.paginate(**kwargs):
        for item in page.get(result_key, []):
            yield item


def unique_in_order(items: Iterable[T]) -> List[T]:
    """Return ``items`` without duplicates, keeping first occurrences."""

    return list(dict.fromkeys(items))


__all__ = ["safe_paginate", "unique_in_order"]
