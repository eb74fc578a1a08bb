"""Enumerations for domain models."""

from enum import Enum


class QueryKind(str, Enum):
    """Kinds of batch query; each maps to one upstream endpoint."""

    PORTFOLIO = "PORTFOLIO"
    HISTORICAL = "HISTORICAL"
    TRANSACTIONS = "TRANSACTIONS"


class DateMode(str, Enum):
    """Which date dimension a batch query spans."""

    NO_DATE = "NO_DATE"
    SINGLE_DATE = "SINGLE_DATE"
    MULTI_DATE = "MULTI_DATE"


class SortOrder(str, Enum):
    """Transaction sort order requested from the provider."""

    ASC = "ASC"
    DESC = "DESC"


class TransactionType(str, Enum):
    """Transaction types understood by the provider's txTypes filter."""

    ADDLIQUIDITY = "ADDLIQUIDITY"
    AIRDROP = "AIRDROP"
    APPROVAL = "APPROVAL"
    BORROW = "BORROW"
    BRIDGEIN = "BRIDGEIN"
    BRIDGEOUT = "BRIDGEOUT"
    CLAIM = "CLAIM"
    COLLECT = "COLLECT"
    CLOSEVAULT = "CLOSEVAULT"
    DEPOSIT = "DEPOSIT"
    DONATION = "DONATION"
    EXPENSE = "EXPENSE"
    INCOME = "INCOME"
    LIQUIDATE = "LIQUIDATE"
    MINT = "MINT"
    OPENVAULT = "OPENVAULT"
    RECEIVE = "RECEIVE"
    REMOVELIQUIDITY = "REMOVELIQUIDITY"
    REPAY = "REPAY"
    SEND = "SEND"
    STAKE = "STAKE"
    SUPPLY = "SUPPLY"
    SWAP = "SWAP"
    UNSTAKE = "UNSTAKE"
    WITHDRAW = "WITHDRAW"
