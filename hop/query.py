"""Query-string construction for list endpoints.

List endpoints accept filtering (``name``/``use_regex``), pagination
(``page``/``page_size``), sorting, column selection and sampling windows for
rate and length statistics. These objects are immutable; every ``with_*``
method returns a new instance so a query can be reused and extended.

Example:
    query = (
        DetailsParameters()
        .message_rates(60, 5)
        .lengths(60, 5)
        .query_parameters()
        .with_name("^orders\\.", use_regex=True)
        .with_page(page_size=10)
    )
    page = client.get_queues_page(query=query)
    page = client.get_queues_page(query=query.next_page(page))
"""

from dataclasses import dataclass, field, replace

from .errors import ValidationError
from .paging import Page


@dataclass(frozen=True, slots=True)
class Pagination:
    """Pagination block of a list query.

    Attributes:
        page: 1-based page number.
        page_size: Items per page, or None for the server default.
    """

    page: int = 1
    page_size: int | None = None

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValidationError(f"page must be >= 1, got {self.page}")
        if self.page_size is not None and self.page_size < 1:
            raise ValidationError(f"page_size must be >= 1, got {self.page_size}")


@dataclass(frozen=True, slots=True)
class DetailsParameters:
    """Sampling windows for rate and length time series.

    Without a window the server returns point values only.

    Attributes:
        msg_rates_age: How far back to sample message rates, in seconds.
        msg_rates_incr: Sampling interval for message rates, in seconds.
        lengths_age: How far back to sample queue lengths, in seconds.
        lengths_incr: Sampling interval for queue lengths, in seconds.
    """

    msg_rates_age: int | None = None
    msg_rates_incr: int | None = None
    lengths_age: int | None = None
    lengths_incr: int | None = None

    def __post_init__(self) -> None:
        _check_window("message rates", self.msg_rates_age, self.msg_rates_incr)
        _check_window("lengths", self.lengths_age, self.lengths_incr)

    def message_rates(self, age: int, increment: int) -> "DetailsParameters":
        """Request message rate samples over ``age`` seconds every ``increment``."""
        return replace(self, msg_rates_age=age, msg_rates_incr=increment)

    def lengths(self, age: int, increment: int) -> "DetailsParameters":
        """Request queue length samples over ``age`` seconds every ``increment``."""
        return replace(self, lengths_age=age, lengths_incr=increment)

    def query_parameters(self) -> "QueryParameters":
        """Start a QueryParameters that carries these sampling windows."""
        return QueryParameters(details=self)

    def to_params(self) -> list[tuple[str, str]]:
        params: list[tuple[str, str]] = []
        if self.msg_rates_age is not None:
            params.append(("msg_rates_age", str(self.msg_rates_age)))
            params.append(("msg_rates_incr", str(self.msg_rates_incr)))
        if self.lengths_age is not None:
            params.append(("lengths_age", str(self.lengths_age)))
            params.append(("lengths_incr", str(self.lengths_incr)))
        return params


def _check_window(label: str, age: int | None, increment: int | None) -> None:
    if (age is None) != (increment is None):
        raise ValidationError(f"{label} sampling needs both age and increment")
    if age is not None and increment is not None and (age < 0 or increment < 1):
        raise ValidationError(
            f"{label} sampling needs age >= 0 and increment >= 1, "
            f"got age={age} increment={increment}"
        )


@dataclass(frozen=True, slots=True)
class QueryParameters:
    """Filtering, pagination, sorting and sampling for a list call.

    Absence of ``pagination`` means "all matching items, unpaged".

    Attributes:
        name: Name filter (substring, or regular expression if use_regex).
        use_regex: Treat ``name`` as a regular expression.
        pagination: Page request, or None for an unpaged list.
        sort: Field to sort by.
        sort_reverse: Sort descending.
        columns: Fields to include in each returned item.
        details: Sampling windows for statistics.
    """

    name: str | None = None
    use_regex: bool = False
    pagination: Pagination | None = None
    sort: str | None = None
    sort_reverse: bool = False
    columns: tuple[str, ...] = field(default_factory=tuple)
    details: DetailsParameters | None = None

    @property
    def is_paginated(self) -> bool:
        return self.pagination is not None

    def with_name(self, name: str, use_regex: bool = False) -> "QueryParameters":
        return replace(self, name=name, use_regex=use_regex)

    def with_page(self, page: int = 1, page_size: int | None = None) -> "QueryParameters":
        """Request one page. ``page_size`` is kept from an existing block if omitted."""
        if page_size is None and self.pagination is not None:
            page_size = self.pagination.page_size
        return replace(self, pagination=Pagination(page=page, page_size=page_size))

    def without_pagination(self) -> "QueryParameters":
        return replace(self, pagination=None)

    def with_sort(self, key: str, reverse: bool = False) -> "QueryParameters":
        return replace(self, sort=key, sort_reverse=reverse)

    def with_columns(self, *columns: str) -> "QueryParameters":
        return replace(self, columns=tuple(columns))

    def with_details(self, details: DetailsParameters) -> "QueryParameters":
        return replace(self, details=details)

    def next_page(self, page: Page) -> "QueryParameters":
        """Query for the page after ``page``, keeping every other filter.

        Asking beyond the last page is allowed; the server returns an empty
        page.
        """
        page_size = self.pagination.page_size if self.pagination else page.page_size
        return replace(
            self, pagination=Pagination(page=page.page + 1, page_size=page_size)
        )

    def to_params(self) -> list[tuple[str, str]]:
        """Render as ordered query-string pairs.

        The order is fixed so the same query always produces the same
        string.
        """
        params: list[tuple[str, str]] = []
        if self.name is not None:
            params.append(("name", self.name))
            if self.use_regex:
                params.append(("use_regex", "true"))
        if self.pagination is not None:
            params.append(("page", str(self.pagination.page)))
            if self.pagination.page_size is not None:
                params.append(("page_size", str(self.pagination.page_size)))
        if self.sort is not None:
            params.append(("sort", self.sort))
            if self.sort_reverse:
                params.append(("sort_reverse", "true"))
        if self.columns:
            params.append(("columns", ",".join(self.columns)))
        if self.details is not None:
            params.extend(self.details.to_params())
        return params


@dataclass(frozen=True, slots=True)
class DeleteQueueParameters:
    """Conditions for deleting a queue.

    Attributes:
        if_empty: Only delete if the queue has no messages.
        if_unused: Only delete if the queue has no consumers.
    """

    if_empty: bool = False
    if_unused: bool = False

    def to_params(self) -> list[tuple[str, str]]:
        params: list[tuple[str, str]] = []
        if self.if_empty:
            params.append(("if-empty", "true"))
        if self.if_unused:
            params.append(("if-unused", "true"))
        return params
