"""In-memory implementation of HoldingRepository."""

from collections import defaultdict

from portfolio_calc.domain.models import Holding, normalize_symbol


class InMemoryHoldingRepository:
    """Dict-backed holding store keyed by (symbol, account_id)."""

    def __init__(self) -> None:
        self._holdings: dict[str, dict[str, Holding]] = defaultdict(dict)

    def list_holdings(self, symbol: str) -> list[Holding]:
        """List every account's holding for a symbol (empty if none)."""
        by_account = self._holdings.get(normalize_symbol(symbol), {})
        return [by_account[account_id] for account_id in sorted(by_account)]

    def list_symbols(self) -> list[str]:
        """List symbols that have at least one holding."""
        return sorted(symbol for symbol, by_account in self._holdings.items() if by_account)

    def upsert(self, symbol: str, holding: Holding) -> Holding:
        """Insert or replace the account's holding for a symbol."""
        self._holdings[normalize_symbol(symbol)][holding.account_id] = holding
        return holding

    def delete(self, symbol: str, account_id: str) -> None:
        """Remove the account's holding (full divestment)."""
        symbol = normalize_symbol(symbol)
        by_account = self._holdings.get(symbol)
        if by_account is not None:
            by_account.pop(account_id, None)
            if not by_account:
                del self._holdings[symbol]
