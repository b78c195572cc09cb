"""Level-based entry, stop and target synthesis."""

from typing import Optional

from ltp_engine.configuration.ltp_config import ATR_PROXY_PERCENT, TARGET_R_MULTIPLES
from ltp_engine.constants import TREND_BULLISH, TREND_BEARISH
from ltp_engine.models import KeyLevel, TradeParams, TrendDirection
from ltp_engine.utils.numbers import round_half_up

PRICE_DECIMALS = 2
RISK_REWARD_DECIMALS = 1
# Reward leg for the reported risk/reward ratio (target_2)
REWARD_TARGET_INDEX = 1


def calculate_trade_params(
    current_price: float,
    level: Optional[KeyLevel],
    direction: TrendDirection,
    *,
    atr_percent: float = ATR_PROXY_PERCENT,
) -> TradeParams:
    """
    Derive entry, stop, 1R/2R/3R targets and risk/reward from a level.

    The stop sits one ATR beyond the level, where ATR is approximated as
    ``atr_percent`` of the current price (a flat volatility proxy, not a
    computed ATR). Entry is the current price.

    Args:
        current_price: Latest traded price
        level: Level the setup is built on, or None
        direction: BULLISH or BEARISH

    Returns:
        TradeParams, all None when there is no level or no tradable direction
    """
    direction = TrendDirection.from_raw(direction)
    if level is None or direction not in (TREND_BULLISH, TREND_BEARISH):
        return TradeParams.empty()

    atr = current_price * atr_percent / 100
    entry = current_price

    if direction == TREND_BULLISH:
        stop = level.price - atr
        unit_risk = entry - stop
        targets = [entry + unit_risk * multiple for multiple in TARGET_R_MULTIPLES]
    else:
        stop = level.price + atr
        unit_risk = stop - entry
        targets = [entry - unit_risk * multiple for multiple in TARGET_R_MULTIPLES]

    risk = abs(entry - stop)
    reward = abs(targets[REWARD_TARGET_INDEX] - entry)
    risk_reward = reward / risk if risk > 0 else 0.0

    target_1, target_2, target_3 = (round_half_up(t, PRICE_DECIMALS) for t in targets)
    return TradeParams(
        suggested_entry=round_half_up(entry, PRICE_DECIMALS),
        suggested_stop=round_half_up(stop, PRICE_DECIMALS),
        target_1=target_1,
        target_2=target_2,
        target_3=target_3,
        risk_reward=round_half_up(risk_reward, RISK_REWARD_DECIMALS),
    )
