"""
RSI Indicator - Relative Strength Index calculation.

Measures the speed and magnitude of recent price changes
to evaluate overbought or oversold conditions.
"""


def _rsi_value(avg_gain: float, avg_loss: float) -> float:
    if avg_loss == 0:
        return 100.0
    rs = avg_gain / avg_loss
    return 100 - (100 / (1 + rs))


def rsi_series(prices: list[float], period: int = 14) -> list[float | None]:
    """
    Calculate RSI for every price using Wilder's smoothing.

    The averages are seeded from the first `period` price changes, then
    smoothed with (prev_avg * (period - 1) + current) / period.

    Args:
        prices: List of prices (most recent last)
        period: Lookback period (default 14)

    Returns:
        List the same length as prices. The first `period` entries are None;
        everything is None if len(prices) <= period.
    """
    if len(prices) <= period or period <= 0:
        return [None] * len(prices)

    result: list[float | None] = [None] * period

    gains = 0.0
    losses = 0.0
    for i in range(1, period + 1):
        change = prices[i] - prices[i - 1]
        if change > 0:
            gains += change
        else:
            losses -= change  # losses are positive values

    avg_gain = gains / period
    avg_loss = losses / period
    result.append(_rsi_value(avg_gain, avg_loss))

    for i in range(period + 1, len(prices)):
        change = prices[i] - prices[i - 1]
        gain = change if change > 0 else 0.0
        loss = -change if change < 0 else 0.0

        avg_gain = (avg_gain * (period - 1) + gain) / period
        avg_loss = (avg_loss * (period - 1) + loss) / period
        result.append(_rsi_value(avg_gain, avg_loss))

    return result


def rsi(prices: list[float], period: int = 14) -> float | None:
    """
    Calculate the latest Relative Strength Index.

    RSI = 100 - (100 / (1 + RS)), RS = Average Gain / Average Loss.
    RSI is 100 when the smoothed average loss is zero.

    Args:
        prices: List of prices (most recent last), needs period + 1 prices minimum
        period: Lookback period (default 14)

    Returns:
        RSI value (0-100) or None if insufficient data
    """
    series = rsi_series(prices, period)
    return series[-1] if series else None
