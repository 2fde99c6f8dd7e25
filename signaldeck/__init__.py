"""
SignalDeck - technical indicators and rate-limited signal analysis.

Subpackages:
- core: Bar model and configuration
- indicators: SMA/EMA, RSI, MACD and volume anomaly kernels
- signals: Pattern and crossover detectors, indicator engine
- ai: Request scheduler and analysis-service client
- data: Candle sources
- ui: Display styles
"""

__version__ = "0.1.0"
