"""Query string building for the Static API."""

from typing import Union

from ..models.options import ClassicSnapshotOptions, MarkerOptions, SnapshotOptions
from ..utils.percent import QUERY_VALUE_SAFE, percent_encode

QueryItems = list[tuple[str, str]]


def option_query_items(
    options: Union[ClassicSnapshotOptions, SnapshotOptions, MarkerOptions],
) -> QueryItems:
    """
    Query items implied by the options.

    Flags at their default value are left out to keep URLs minimal.
    """
    items: QueryItems = []
    if isinstance(options, SnapshotOptions):
        if options.before_layer is not None:
            items.append(("before_layer", options.before_layer))
        if not options.shows_logo:
            items.append(("logo", "false"))
        if not options.shows_attribution:
            items.append(("attribution", "false"))
    return items


def build_query_items(
    options: Union[ClassicSnapshotOptions, SnapshotOptions, MarkerOptions],
    access_token: str,
) -> QueryItems:
    """Option query items followed by the access token."""
    return option_query_items(options) + [("access_token", access_token)]


def encode_query(items: QueryItems) -> str:
    """Percent-encode name/value pairs into a query string."""
    return "&".join(
        f"{percent_encode(name, QUERY_VALUE_SAFE)}={percent_encode(value, QUERY_VALUE_SAFE)}"
        for name, value in items
    )
