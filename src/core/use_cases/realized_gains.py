import logging
from typing import Dict, List, Sequence

from src.core.entities.gains import RealizedGainRecord, RealizedGainsResponse
from src.core.entities.trade import Trade, TradeSide
from src.core.use_cases.numeric import ZERO, mean, safe_percent

logger = logging.getLogger(__name__)


class _SymbolBucket:
    __slots__ = ("buys", "sells")

    def __init__(self):
        self.buys: List[Trade] = []
        self.sells: List[Trade] = []


class RealizedGainsCalculator:
    """
    Reconciles closed-position P/L from a raw trade ledger.

    Every executed sell is priced against the average price of all executed
    buys of the same symbol that happened strictly before it. Buy lots are
    not consumed: two sells of the same symbol can match the same buys.
    """

    @staticmethod
    def compute(trades: Sequence[Trade]) -> RealizedGainsResponse:
        executed = [t for t in trades if t.is_executed]

        # Buckets keep first-seen order (buys first), which decides tie order below
        buckets: Dict[str, _SymbolBucket] = {}
        for trade in executed:
            if trade.side == TradeSide.BUY:
                buckets.setdefault(trade.symbol, _SymbolBucket()).buys.append(trade)
        for trade in executed:
            if trade.side == TradeSide.SELL:
                buckets.setdefault(trade.symbol, _SymbolBucket()).sells.append(trade)

        records: List[RealizedGainRecord] = []
        for symbol, bucket in buckets.items():
            for sell in bucket.sells:
                matching_buys = [b for b in bucket.buys if b.sort_time < sell.sort_time]
                if not matching_buys:
                    logger.debug(f"No prior buy for {symbol} sell {sell.id}; skipping")
                    continue
                records.append(RealizedGainsCalculator._reconcile(symbol, sell, matching_buys))

        # sorted() is stable, equal sell times keep bucket order
        records = sorted(records, key=lambda r: r.sell_trade.sort_time, reverse=True)

        total_gains = sum((r.gain_loss for r in records if r.gain_loss > 0), ZERO)
        total_losses = sum((r.gain_loss for r in records if r.gain_loss < 0), ZERO)

        return RealizedGainsResponse(
            records=records,
            total_gains=total_gains,
            total_losses=total_losses,
            net_gain_loss=total_gains + total_losses,
        )

    @staticmethod
    def _reconcile(symbol: str, sell: Trade, matching_buys: List[Trade]) -> RealizedGainRecord:
        avg_buy_price = mean(b.price for b in matching_buys)
        spread = sell.price - avg_buy_price
        return RealizedGainRecord(
            symbol=symbol,
            buy_trade=matching_buys[0],
            sell_trade=sell,
            quantity=sell.quantity,
            buy_price=avg_buy_price,
            sell_price=sell.price,
            gain_loss=spread * sell.quantity,
            gain_loss_percent=safe_percent(spread, avg_buy_price),
        )
