"""
Moving Average Indicators - SMA and EMA calculations.

Pure math functions for calculating simple and exponential moving averages.
"""


def sma_series(values: list[float], period: int) -> list[float | None]:
    """
    Calculate a Simple Moving Average series aligned with the input.

    The window sum is maintained incrementally: the value leaving the
    window is subtracted and the value entering it is added.

    Args:
        values: List of values (most recent last)
        period: Number of periods to average

    Returns:
        List the same length as values; None until `period` values are available
    """
    if period <= 0 or len(values) < period:
        return [None] * len(values)

    result: list[float | None] = [None] * (period - 1)

    window_sum = sum(values[:period])
    result.append(window_sum / period)

    for i in range(period, len(values)):
        window_sum = window_sum - values[i - period] + values[i]
        result.append(window_sum / period)

    return result


def sma(values: list[float], period: int) -> float | None:
    """
    Calculate Simple Moving Average.

    Args:
        values: List of values (most recent last)
        period: Number of periods to average

    Returns:
        SMA value or None if insufficient data
    """
    if len(values) < period or period <= 0:
        return None

    return sum(values[-period:]) / period


def ema_series(prices: list[float], period: int) -> list[float]:
    """
    Calculate EMA series for all available data points.

    The first value is seeded with the SMA of the first `period` prices;
    each later value is price * k + previous * (1 - k), k = 2 / (period + 1).

    Args:
        prices: List of prices (most recent last)
        period: Number of periods for EMA calculation

    Returns:
        List of EMA values (len(prices) - period + 1 long, no padding),
        empty if insufficient data
    """
    if len(prices) < period or period <= 0:
        return []

    k = 2 / (period + 1)
    result: list[float] = [sum(prices[:period]) / period]

    for price in prices[period:]:
        result.append(price * k + result[-1] * (1 - k))

    return result


def ema(prices: list[float], period: int) -> float | None:
    """
    Calculate Exponential Moving Average.

    Args:
        prices: List of prices (most recent last)
        period: Number of periods for EMA calculation

    Returns:
        Current EMA value or None if insufficient data
    """
    series = ema_series(prices, period)
    return series[-1] if series else None
