"""Wallet address normalization."""

from wallet_aggregator.core.exceptions import ValidationError


def normalize_address(address: str) -> str:
    """Return the canonical (trimmed, lowercase) form of a wallet address."""
    return address.strip().lower()


def parse_addresses(values: list[str] | str | None) -> list[str]:
    """
    Parse addresses from comma-separated strings or repeated values.

    Addresses are normalized to lowercase and deduplicated, keeping the
    order in which they were first given. Raises ValidationError when no
    address remains.
    """
    if values is None:
        raise ValidationError("addresses parameter is required")
    if isinstance(values, str):
        values = [values]

    result: list[str] = []
    seen: set[str] = set()
    for raw in values:
        for part in raw.split(","):
            address = normalize_address(part)
            if address and address not in seen:
                seen.add(address)
                result.append(address)

    if not result:
        raise ValidationError("At least one address is required")
    return result
