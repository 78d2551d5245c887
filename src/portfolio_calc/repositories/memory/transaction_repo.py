"""In-memory implementation of TransactionRepository."""

from collections import defaultdict

from portfolio_calc.domain.models import Purchase, normalize_symbol


class InMemoryTransactionRepository:
    """List-backed buy-transaction history."""

    def __init__(self) -> None:
        self._purchases: dict[str, list[Purchase]] = defaultdict(list)

    def list_purchases(self, symbol: str) -> list[Purchase]:
        """List buy transactions for a symbol, oldest first."""
        purchases = self._purchases.get(normalize_symbol(symbol), [])
        return sorted(purchases, key=lambda p: p.trade_date)

    def add(self, purchase: Purchase) -> Purchase:
        """Append a buy transaction."""
        self._purchases[purchase.symbol].append(purchase)
        return purchase
