"""Supported tickers and their starting prices."""

# Starting prices for the simulator; also defines the closed set of supported tickers
SEED_PRICES: dict[str, float] = {
    "GOOG": 150.00,
    "TSLA": 250.00,
    "AMZN": 180.00,
    "META": 320.00,
    "NVDA": 500.00,
}

SUPPORTED_TICKERS: tuple[str, ...] = tuple(SEED_PRICES)

# Display names for the stock listing
STOCK_NAMES: dict[str, str] = {
    "GOOG": "Alphabet Inc.",
    "TSLA": "Tesla Inc.",
    "AMZN": "Amazon.com Inc.",
    "META": "Meta Platforms Inc.",
    "NVDA": "NVIDIA Corporation",
}


def normalize_ticker(ticker: str) -> str:
    return ticker.strip().upper()
