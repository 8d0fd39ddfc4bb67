"""
Symbol List for Binance Spot Markets

Default trading pairs shown on the grid when no list is configured.
"""

# Popular Binance spot pairs (source list contains repeats)
_RAW_SYMBOLS = [
    "BTCUSDT", "ETHUSDT", "PAXGUSDT", "BNBUSDT", "SOLUSDT", "ADAUSDT",
    "XRPUSDT", "DOTUSDT", "DOGEUSDT", "AVAXUSDT", "POLUSDT",
    "LINKUSDT", "ATOMUSDT", "UNIUSDT", "FILUSDT", "LTCUSDT",
    "BCHUSDT", "XLMUSDT", "VETUSDT", "THETAUSDT", "AXSUSDT",
    "ETCUSDT", "SEIUSDT", "XTZUSDT", "ALGOUSDT", "SANDUSDT",
    "MANAUSDT", "GALAUSDT", "APEUSDT", "NEARUSDT", "FLOWUSDT",
    "GRTUSDT", "AAVEUSDT", "CHZUSDT", "ENJUSDT", "IOTXUSDT",
    "KAVAUSDT", "KSMUSDT", "LRCUSDT", "ONEUSDT", "QTUMUSDT",
    "RUNEUSDT", "SCRTUSDT", "SNXUSDT", "STXUSDT", "SUSHIUSDT",
    "ZECUSDT", "ZILUSDT", "ZRXUSDT", "ICPUSDT", "ARUSDT",
    "CELOUSDT", "COMPUSDT", "CRVUSDT", "DASHUSDT", "DYDXUSDT",
    "EGLDUSDT", "ENSUSDT", "IMXUSDT", "INJUSDT", "IOSTUSDT",
    "JASMYUSDT", "PHBUSDT", "LDOUSDT", "ONDOUSDT", "MKRUSDT",
    "JTOUSDT", "OMNIUSDT", "OPUSDT", "PEOPLEUSDT", "PERPUSDT",
    "RENUSDT", "ROSEUSDT", "RSRUSDT", "RVNUSDT", "SKLUSDT",
    "STORJUSDT", "TRXUSDT", "WIFUSDT", "YFIUSDT", "1INCHUSDT",
    "OMUSDT", "HYPERUSDT", "CFXUSDT", "STRKUSDT", "BANDUSDT",
    "BATUSDT", "BIGTIMEUSDT", "CELRUSDT", "COTIUSDT", "CVCUSDT",
    "DENTUSDT", "PYTHUSDT", "HOTUSDT", "ICXUSDT", "API3USDT",
    "KNCUSDT", "MAGICUSDT", "SAGAUSDT", "TRUMPUSDT", "MASKUSDT",
    "NKNUSDT", "OGNUSDT", "ONTUSDT", "POWRUSDT", "TAOUSDT",
    "PENDLEUSDT", "SLPUSDT", "BEARUSDT", "SXPUSDT", "HBARUSDT",
    "UMAUSDT", "WOOUSDT", "TRBUSDT", "REZUSDT", "ANKRUSDT",
    "ARPAUSDT", "BELUSDT", "C98USDT", "CHRUSDT", "CTKUSDT",
    "SOLVUSDT", "JUPUSDT", "ORDIUSDT", "FLMUSDT", "FORTHUSDT",
    "SOLETH", "TWTUSDT", "ETHBTC", "HIVEUSDT", "JSTUSDT",
    "LPTUSDT", "WLFIUSDT", "MINAUSDT", "MOVRUSDT", "NEOUSDT",
    "NMRUSDT", "OXTUSDT", "BICOUSDT", "SAHARAUSDT", "QNTUSDT",
    "QUICKUSDT", "TONUSDT", "TIAUSDT", "RLCUSDT", "WIFUSDT",
    "SPELLUSDT", "ACHUSDT", "SUPERUSDT", "SYSUSDT", "FORMUSDT",
    "TLMUSDT", "TWTUSDT", "XVGUSDT",
]


def normalize_symbol(symbol: str) -> str:
    """Convert a user-supplied pair to Binance format (e.g. ' btcusdt' -> 'BTCUSDT')."""
    return symbol.upper().strip()


def unique_symbols(symbols: list[str]) -> list[str]:
    """Normalize and drop repeats, keeping first-seen order."""
    seen: dict[str, None] = {}
    for symbol in symbols:
        normalized = normalize_symbol(symbol)
        if normalized:
            seen.setdefault(normalized, None)
    return list(seen)


DEFAULT_SYMBOLS: list[str] = unique_symbols(_RAW_SYMBOLS)
